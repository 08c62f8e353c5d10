"""Share link endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from photo_gallery.api.auth import require_bearer
from photo_gallery.api.schemas import PhotoActionRequest, PhotoOut, ShareLinkOut

if TYPE_CHECKING:
    from photo_gallery.containers import AppContainer

router = APIRouter(prefix="/share", tags=["share"])


@router.post(
    "",
    response_model=ShareLinkOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer)],
)
async def create_share_link(body: PhotoActionRequest, request: Request) -> ShareLinkOut:
    """Mint a time-limited share link for an active photo."""
    container: AppContainer = request.app.state.container
    minted = container.share_link_service.mint(body.photo_id)
    base_url = container.settings.share_base_url.rstrip("/")
    return ShareLinkOut(
        token=minted.token,
        url=f"{base_url}/share/{minted.token}",
        expires_at=minted.expires_at,
    )


@router.get("/{token}", response_model=PhotoOut)
async def get_shared_photo(token: str, request: Request) -> PhotoOut:
    """Return the photo behind a share token (no authentication)."""
    container: AppContainer = request.app.state.container
    return PhotoOut.from_record(container.share_link_service.resolve(token))
