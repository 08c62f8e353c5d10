"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photo_gallery.adapters.supabase_support import execute, parse_timestamp
from photo_gallery.domain.errors import UnavailableError
from photo_gallery.domain.photos import LifecycleState, PhotoRecord
from photo_gallery.services.photos import PhotoRepository

_COLUMNS = (
    "id, title, original_uri, thumbnail_uri, storage_key, content_type, "
    "created_at, lifecycle_state, state_changed_at, recycled_at"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo records.

    Purged rows keep a ``deleted`` tombstone that every read filters out.
    """

    client: Client
    table_name: str = "photos"

    def create_photo(self, photo: PhotoRecord) -> None:
        """Insert a photo row."""
        response = execute(
            self.client.table(self.table_name).insert(_serialize_photo(photo)),
            "photo insert",
        )
        if not response.data:
            raise UnavailableError("Failed to create photo record")

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a non-deleted photo by id."""
        response = execute(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .neq("lifecycle_state", LifecycleState.DELETED.value)
            .limit(1),
            "photo lookup",
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def list_photos(
        self, state: LifecycleState, offset: int, limit: int
    ) -> list[PhotoRecord]:
        """Return one page of photos in a state, newest first."""
        response = execute(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("lifecycle_state", state.value)
            .order("state_changed_at", desc=True)
            .order("id", desc=True)
            .range(offset, offset + limit - 1),
            "photo listing",
        )
        return [_parse_photo(row) for row in response.data or []]

    def count_photos(self, state: LifecycleState) -> int:
        """Return the number of photos in a state."""
        response = execute(
            self.client.table(self.table_name)
            .select("id", count="exact")
            .eq("lifecycle_state", state.value)
            .limit(1),
            "photo count",
        )
        return int(response.count or 0)

    def compare_and_swap_state(  # noqa: PLR0913
        self,
        photo_id: UUID,
        expected: LifecycleState,
        new_state: LifecycleState,
        changed_at: datetime,
        recycled_at: datetime | None,
    ) -> PhotoRecord | None:
        """Conditionally update the lifecycle state of a photo."""
        response = execute(
            self.client.table(self.table_name)
            .update(
                {
                    "lifecycle_state": new_state.value,
                    "state_changed_at": changed_at.isoformat(),
                    "recycled_at": recycled_at.isoformat() if recycled_at else None,
                }
            )
            .eq("id", str(photo_id))
            .eq("lifecycle_state", expected.value),
            "photo state change",
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def update_title(self, photo_id: UUID, title: str) -> PhotoRecord | None:
        """Update the title of an active photo."""
        response = execute(
            self.client.table(self.table_name)
            .update({"title": title})
            .eq("id", str(photo_id))
            .eq("lifecycle_state", LifecycleState.ACTIVE.value),
            "photo rename",
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def list_recycled_before(self, cutoff: datetime) -> list[PhotoRecord]:
        """Return recycled photos recycled at or before the cutoff."""
        response = execute(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("lifecycle_state", LifecycleState.RECYCLED.value)
            .lte("recycled_at", cutoff.isoformat())
            .order("recycled_at", desc=False),
            "purgeable listing",
        )
        return [_parse_photo(row) for row in response.data or []]


def _serialize_photo(photo: PhotoRecord) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "title": photo.title,
        "original_uri": photo.original_uri,
        "thumbnail_uri": photo.thumbnail_uri,
        "storage_key": photo.storage_key,
        "content_type": photo.content_type,
        "created_at": photo.created_at.isoformat(),
        "lifecycle_state": photo.state.value,
        "state_changed_at": photo.state_changed_at.isoformat(),
        "recycled_at": photo.recycled_at.isoformat() if photo.recycled_at else None,
    }


def _parse_photo(row: dict[str, object]) -> PhotoRecord:
    created_at = datetime.fromisoformat(str(row["created_at"]))
    return PhotoRecord(
        id=UUID(str(row["id"])),
        title=str(row.get("title") or ""),
        original_uri=str(row.get("original_uri") or ""),
        thumbnail_uri=str(row.get("thumbnail_uri") or ""),
        storage_key=str(row.get("storage_key") or ""),
        content_type=str(row.get("content_type") or ""),
        created_at=created_at,
        state=LifecycleState(str(row["lifecycle_state"])),
        state_changed_at=parse_timestamp(row.get("state_changed_at")) or created_at,
        recycled_at=parse_timestamp(row.get("recycled_at")),
    )
