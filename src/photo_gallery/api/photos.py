"""Photo collection and recycle bin endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from photo_gallery.api.auth import require_bearer
from photo_gallery.api.schemas import (
    PhotoActionRequest,
    PhotoOut,
    PhotoPageOut,
    RenameRequest,
    SweepResult,
)
from photo_gallery.domain.photos import UploadedImage

if TYPE_CHECKING:
    from photo_gallery.containers import AppContainer

router = APIRouter(tags=["photos"], dependencies=[Depends(require_bearer)])


@router.get("/images", response_model=PhotoPageOut)
async def list_active_photos(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
) -> PhotoPageOut:
    """Return a page of active photos."""
    container: AppContainer = request.app.state.container
    return PhotoPageOut.from_page(container.photo_service.list_active(page, limit))


@router.get("/recycle/images", response_model=PhotoPageOut)
async def list_recycled_photos(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
) -> PhotoPageOut:
    """Return a page of photos in the recycle bin."""
    container: AppContainer = request.app.state.container
    return PhotoPageOut.from_page(container.photo_service.list_recycled(page, limit))


@router.post(
    "/upload", response_model=PhotoOut, status_code=status.HTTP_201_CREATED
)
async def upload_photo(
    request: Request,
    file: UploadFile = File(...),
    title: str | None = Form(default=None),
) -> PhotoOut:
    """Upload a new photo into the active collection."""
    container: AppContainer = request.app.state.container
    # One byte past the ceiling is enough to reject oversize uploads.
    content = await file.read(container.settings.max_upload_bytes + 1)
    image = UploadedImage(
        content=content,
        content_type=file.content_type or "",
        filename=file.filename,
    )
    photo = container.photo_service.upload(image, title)
    return PhotoOut.from_record(photo)


@router.patch("/images/{photo_id}", response_model=PhotoOut)
async def rename_photo(
    photo_id: UUID, body: RenameRequest, request: Request
) -> PhotoOut:
    """Change the title of an active photo."""
    container: AppContainer = request.app.state.container
    return PhotoOut.from_record(container.photo_service.rename(photo_id, body.title))


@router.post("/recycle/delete", status_code=status.HTTP_204_NO_CONTENT)
async def recycle_photo(body: PhotoActionRequest, request: Request) -> None:
    """Move a photo to the recycle bin."""
    container: AppContainer = request.app.state.container
    container.photo_service.recycle(body.photo_id)


@router.post("/recycle/recover", status_code=status.HTTP_204_NO_CONTENT)
async def recover_photo(body: PhotoActionRequest, request: Request) -> None:
    """Restore a photo from the recycle bin."""
    container: AppContainer = request.app.state.container
    container.photo_service.recover(body.photo_id)


@router.post("/recycle/permanentdelete", status_code=status.HTTP_204_NO_CONTENT)
async def purge_photo(body: PhotoActionRequest, request: Request) -> None:
    """Permanently delete a recycled photo."""
    container: AppContainer = request.app.state.container
    container.photo_service.purge_forever(body.photo_id)


@router.post("/recycle/sweep", response_model=SweepResult)
async def sweep_recycle_bin(request: Request) -> SweepResult:
    """Purge recycled photos past the retention window."""
    container: AppContainer = request.app.state.container
    return SweepResult(purged=container.retention_service.sweep())
