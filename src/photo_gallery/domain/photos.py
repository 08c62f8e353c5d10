"""Domain models for gallery photos."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class LifecycleState(StrEnum):
    """Lifecycle states a photo moves through."""

    ACTIVE = "active"
    RECYCLED = "recycled"
    DELETED = "deleted"


@dataclass(frozen=True)
class PhotoRecord:
    """Represents a photo stored in the gallery."""

    id: UUID
    title: str
    original_uri: str
    thumbnail_uri: str
    storage_key: str
    content_type: str
    created_at: datetime
    state: LifecycleState
    state_changed_at: datetime
    recycled_at: datetime | None = None


@dataclass(frozen=True)
class PhotoPage:
    """One page of a photo collection."""

    items: list[PhotoRecord]
    total_count: int
    page_size: int
    current_page: int


@dataclass(frozen=True)
class UploadedImage:
    """Raw image bytes as received from a client."""

    content: bytes
    content_type: str
    filename: str | None = None


@dataclass(frozen=True)
class StoredAsset:
    """References to image bytes held by the asset store."""

    storage_key: str
    original_uri: str
    thumbnail_uri: str
