"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from itertools import count
from uuid import UUID

import pytest

from photo_gallery.config import Settings
from photo_gallery.containers import AppContainer
from photo_gallery.domain.errors import UnavailableError
from photo_gallery.domain.photos import (
    LifecycleState,
    PhotoRecord,
    StoredAsset,
    UploadedImage,
)
from photo_gallery.domain.shares import ShareLinkRecord
from photo_gallery.services.clock import Clock
from photo_gallery.services.photos import (
    AssetStorage,
    PhotoLifecycleService,
    PhotoRepository,
)
from photo_gallery.services.retention import RetentionService
from photo_gallery.services.shares import ShareLinkRepository, ShareLinkService

API_TOKEN = "test-api-token"
AUTH_HEADERS = {"Authorization": f"Bearer {API_TOKEN}"}

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@dataclass
class FakeClock(Clock):
    """Clock that only moves when told to."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    photos: dict[UUID, PhotoRecord] = field(default_factory=dict)
    positions: dict[UUID, int] = field(default_factory=dict)
    _sequence: count = field(default_factory=count)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create_photo(self, photo: PhotoRecord) -> None:
        with self._lock:
            self.photos[photo.id] = photo
            self.positions[photo.id] = next(self._sequence)

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        photo = self.photos.get(photo_id)
        if photo is None or photo.state is LifecycleState.DELETED:
            return None
        return photo

    def list_photos(
        self, state: LifecycleState, offset: int, limit: int
    ) -> list[PhotoRecord]:
        return self._in_state(state)[offset : offset + limit]

    def count_photos(self, state: LifecycleState) -> int:
        return len(self._in_state(state))

    def compare_and_swap_state(  # noqa: PLR0913
        self,
        photo_id: UUID,
        expected: LifecycleState,
        new_state: LifecycleState,
        changed_at: datetime,
        recycled_at: datetime | None,
    ) -> PhotoRecord | None:
        with self._lock:
            current = self.photos.get(photo_id)
            if current is None or current.state is not expected:
                return None
            updated = replace(
                current,
                state=new_state,
                state_changed_at=changed_at,
                recycled_at=recycled_at,
            )
            self.photos[photo_id] = updated
            self.positions[photo_id] = next(self._sequence)
            return updated

    def update_title(self, photo_id: UUID, title: str) -> PhotoRecord | None:
        with self._lock:
            current = self.photos.get(photo_id)
            if current is None or current.state is not LifecycleState.ACTIVE:
                return None
            updated = replace(current, title=title)
            self.photos[photo_id] = updated
            return updated

    def list_recycled_before(self, cutoff: datetime) -> list[PhotoRecord]:
        return [
            photo
            for photo in self._in_state(LifecycleState.RECYCLED)
            if photo.recycled_at is not None and photo.recycled_at <= cutoff
        ]

    def _in_state(self, state: LifecycleState) -> list[PhotoRecord]:
        matching = [photo for photo in self.photos.values() if photo.state is state]
        return sorted(matching, key=lambda photo: self.positions[photo.id], reverse=True)


@dataclass
class InMemoryShareLinkRepository(ShareLinkRepository):
    """In-memory share link repository for tests."""

    links: dict[str, ShareLinkRecord] = field(default_factory=dict)

    def create_link(self, link: ShareLinkRecord) -> bool:
        if link.token in self.links:
            return False
        self.links[link.token] = link
        return True

    def get_link(self, token: str) -> ShareLinkRecord | None:
        return self.links.get(token)


@dataclass
class InMemoryAssetStorage(AssetStorage):
    """In-memory asset storage that records stored bytes."""

    objects: dict[str, bytes] = field(default_factory=dict)
    fail_deletes: bool = False

    def store(self, photo_id: UUID, content: bytes, content_type: str) -> StoredAsset:
        storage_key = f"originals/{photo_id}"
        self.objects[storage_key] = content
        return StoredAsset(
            storage_key=storage_key,
            original_uri=f"https://cdn.example.com/{storage_key}",
            thumbnail_uri=f"https://cdn.example.com/{storage_key}?width=600",
        )

    def delete(self, storage_key: str) -> None:
        if self.fail_deletes:
            raise UnavailableError("storage offline")
        self.objects.pop(storage_key, None)


def make_image(
    content: bytes = JPEG_BYTES,
    content_type: str = "image/jpeg",
    filename: str | None = "sunset.jpg",
) -> UploadedImage:
    return UploadedImage(content=content, content_type=content_type, filename=filename)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0.c2lnbmF0dXJl"
        ),
        api_token=API_TOKEN,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def share_link_repository() -> InMemoryShareLinkRepository:
    return InMemoryShareLinkRepository()


@pytest.fixture
def asset_storage() -> InMemoryAssetStorage:
    return InMemoryAssetStorage()


@pytest.fixture
def photo_service(
    photo_repository: InMemoryPhotoRepository,
    asset_storage: InMemoryAssetStorage,
    clock: FakeClock,
) -> PhotoLifecycleService:
    return PhotoLifecycleService(
        repository=photo_repository,
        storage=asset_storage,
        clock=clock,
    )


@pytest.fixture
def share_link_service(
    share_link_repository: InMemoryShareLinkRepository,
    photo_repository: InMemoryPhotoRepository,
    clock: FakeClock,
) -> ShareLinkService:
    return ShareLinkService(
        repository=share_link_repository,
        photo_repository=photo_repository,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    clock: FakeClock,
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        photo_service=photo_service,
        share_link_service=share_link_service,
        retention_service=RetentionService(photo_service),
        close_resources=close_resources,
    )
