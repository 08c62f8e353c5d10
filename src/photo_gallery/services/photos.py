"""Photo lifecycle store: active, recycled and permanently deleted photos."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from photo_gallery.domain.errors import (
    GalleryError,
    InvalidStateError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from photo_gallery.domain.photos import (
    LifecycleState,
    PhotoPage,
    PhotoRecord,
    StoredAsset,
    UploadedImage,
)
from photo_gallery.services.clock import Clock, SystemClock
from photo_gallery.services.uploads import UploadValidator, clean_title

_logger = logging.getLogger(__name__)

_SWAP_ATTEMPTS = 2


class PhotoRepository(Protocol):
    """Persistence interface for photo records.

    Reads never return records in the ``deleted`` state.
    """

    def create_photo(self, photo: PhotoRecord) -> None:
        """Persist a new photo record."""

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo by id, if present and not deleted."""

    def list_photos(
        self, state: LifecycleState, offset: int, limit: int
    ) -> list[PhotoRecord]:
        """Return photos in a state, newest state change first."""

    def count_photos(self, state: LifecycleState) -> int:
        """Return the number of photos in a state."""

    def compare_and_swap_state(  # noqa: PLR0913
        self,
        photo_id: UUID,
        expected: LifecycleState,
        new_state: LifecycleState,
        changed_at: datetime,
        recycled_at: datetime | None,
    ) -> PhotoRecord | None:
        """Move a photo to a new state only if it is still in ``expected``.

        Returns the updated record, or None when the swap did not happen.
        """

    def update_title(self, photo_id: UUID, title: str) -> PhotoRecord | None:
        """Update the title of an active photo and return it."""

    def list_recycled_before(self, cutoff: datetime) -> list[PhotoRecord]:
        """Return recycled photos with ``recycled_at <= cutoff``."""


class AssetStorage(Protocol):
    """Storage interface for image bytes."""

    def store(self, photo_id: UUID, content: bytes, content_type: str) -> StoredAsset:
        """Store image bytes and return references to them."""

    def delete(self, storage_key: str) -> None:
        """Remove stored image bytes."""


@dataclass
class PhotoLifecycleService:
    """Owns lifecycle transitions and paginated listings of photos."""

    repository: PhotoRepository
    storage: AssetStorage
    clock: Clock = field(default_factory=SystemClock)
    validator: UploadValidator = field(default_factory=UploadValidator)
    retention: timedelta = timedelta(days=30)
    max_page_size: int = 100

    def list_active(self, page: int = 1, page_size: int = 20) -> PhotoPage:
        """Return a page of active photos."""
        return self._list(LifecycleState.ACTIVE, page, page_size)

    def list_recycled(self, page: int = 1, page_size: int = 20) -> PhotoPage:
        """Return a page of recycled photos."""
        return self._list(LifecycleState.RECYCLED, page, page_size)

    def get(self, photo_id: UUID) -> PhotoRecord:
        """Return a photo or raise NotFoundError."""
        photo = self.repository.get_photo(photo_id)
        if photo is None:
            raise NotFoundError("photo", photo_id)
        return photo

    def upload(self, image: UploadedImage, title: str | None = None) -> PhotoRecord:
        """Validate and store an image, creating an active photo."""
        content_type = self.validator.validate(image)
        cleaned_title = clean_title(title, image.filename)
        photo_id = uuid4()
        asset = self.storage.store(photo_id, image.content, content_type)
        now = self.clock.now()
        photo = PhotoRecord(
            id=photo_id,
            title=cleaned_title,
            original_uri=asset.original_uri,
            thumbnail_uri=asset.thumbnail_uri,
            storage_key=asset.storage_key,
            content_type=content_type,
            created_at=now,
            state=LifecycleState.ACTIVE,
            state_changed_at=now,
        )
        try:
            self.repository.create_photo(photo)
        except GalleryError:
            self._discard_asset(asset.storage_key, photo_id)
            raise
        _logger.info("Photo uploaded: id=%s bytes=%s", photo_id, len(image.content))
        return photo

    def rename(self, photo_id: UUID, title: str) -> PhotoRecord:
        """Change the title of an active photo."""
        cleaned_title = clean_title(title)
        for _ in range(_SWAP_ATTEMPTS):
            updated = self.repository.update_title(photo_id, cleaned_title)
            if updated is not None:
                return updated
            current = self.get(photo_id)
            if current.state is not LifecycleState.ACTIVE:
                raise InvalidStateError(photo_id, current.state, LifecycleState.ACTIVE)
        raise UnavailableError(
            f"Photo '{photo_id}' changed state concurrently, try again",
            details={"photo_id": str(photo_id)},
        )

    def recycle(self, photo_id: UUID) -> PhotoRecord:
        """Move an active photo to the recycle bin."""
        return self._transition(
            photo_id, LifecycleState.ACTIVE, LifecycleState.RECYCLED
        )

    def recover(self, photo_id: UUID) -> PhotoRecord:
        """Restore a recycled photo to the active collection."""
        return self._transition(
            photo_id, LifecycleState.RECYCLED, LifecycleState.ACTIVE
        )

    def purge_forever(self, photo_id: UUID) -> None:
        """Permanently delete a recycled photo."""
        purged = self._transition(
            photo_id, LifecycleState.RECYCLED, LifecycleState.DELETED
        )
        self._discard_asset(purged.storage_key, photo_id)

    def list_purgeable(self, as_of: datetime) -> list[PhotoRecord]:
        """Return recycled photos whose retention window ended by ``as_of``."""
        return self.repository.list_recycled_before(as_of - self.retention)

    def _list(self, state: LifecycleState, page: int, page_size: int) -> PhotoPage:
        if page < 1:
            raise ValidationError("Page must be at least 1", field="page", value=page)
        if not 1 <= page_size <= self.max_page_size:
            raise ValidationError(
                f"Page size must be between 1 and {self.max_page_size}",
                field="page_size",
                value=page_size,
            )
        offset = (page - 1) * page_size
        return PhotoPage(
            items=self.repository.list_photos(state, offset, page_size),
            total_count=self.repository.count_photos(state),
            page_size=page_size,
            current_page=page,
        )

    def _discard_asset(self, storage_key: str, photo_id: UUID) -> None:
        try:
            self.storage.delete(storage_key)
        except GalleryError as exc:
            _logger.warning(
                "Failed to remove stored asset %s for photo %s: %s",
                storage_key,
                photo_id,
                exc,
            )

    def _transition(
        self, photo_id: UUID, expected: LifecycleState, target: LifecycleState
    ) -> PhotoRecord:
        # A failed swap that reads back as ``expected`` raced a transition
        # that has since been undone.
        for _ in range(_SWAP_ATTEMPTS):
            now = self.clock.now()
            updated = self.repository.compare_and_swap_state(
                photo_id,
                expected=expected,
                new_state=target,
                changed_at=now,
                recycled_at=now if target is LifecycleState.RECYCLED else None,
            )
            if updated is not None:
                _logger.info("Photo %s moved %s -> %s", photo_id, expected, target)
                return updated
            current = self.get(photo_id)
            if current.state is not expected:
                raise InvalidStateError(photo_id, current.state, expected)
        raise UnavailableError(
            f"Photo '{photo_id}' changed state concurrently, try again",
            details={"photo_id": str(photo_id)},
        )
