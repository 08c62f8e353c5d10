"""Pydantic models for the gallery HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from photo_gallery.domain.photos import LifecycleState, PhotoPage, PhotoRecord


class CamelModel(BaseModel):
    """Base model using the front end's camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PhotoOut(CamelModel):
    """Photo payload."""

    id: UUID
    url: str
    thumbnail: str
    title: str
    created_at: datetime
    is_recycled: bool
    recycled_at: datetime | None = None

    @classmethod
    def from_record(cls, photo: PhotoRecord) -> "PhotoOut":
        """Build the payload for a photo record."""
        return cls(
            id=photo.id,
            url=photo.original_uri,
            thumbnail=photo.thumbnail_uri,
            title=photo.title,
            created_at=photo.created_at,
            is_recycled=photo.state is LifecycleState.RECYCLED,
            recycled_at=photo.recycled_at,
        )


class PhotoPageOut(CamelModel):
    """Paginated photo list payload."""

    items: list[PhotoOut]
    total_count: int
    page_size: int
    current_page: int

    @classmethod
    def from_page(cls, page: PhotoPage) -> "PhotoPageOut":
        """Build the payload for a page of photos."""
        return cls(
            items=[PhotoOut.from_record(photo) for photo in page.items],
            total_count=page.total_count,
            page_size=page.page_size,
            current_page=page.current_page,
        )


class PhotoActionRequest(CamelModel):
    """Request body naming a single photo."""

    photo_id: UUID


class RenameRequest(CamelModel):
    """Request body for renaming a photo."""

    title: str = Field(min_length=1)


class ShareLinkOut(CamelModel):
    """Minted share link payload."""

    token: str
    url: str
    expires_at: datetime


class SweepResult(CamelModel):
    """Retention sweep payload."""

    purged: list[UUID]
