"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from photo_gallery.api.photos import router as photos_router
from photo_gallery.api.shares import router as shares_router
from photo_gallery.app_logging import configure_logging
from photo_gallery.containers import AppContainer
from photo_gallery.domain.errors import (
    GalleryError,
    InvalidStateError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[GalleryError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateError: status.HTTP_409_CONFLICT,
    UnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(photos_router)
    app.include_router(shares_router)

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(
        request: Request, exc: GalleryError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if isinstance(exc, UnavailableError):
            logger.error(
                "Backing store unavailable: %s %s",
                request.method,
                request.url.path,
                exc_info=exc,
            )
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.get("/status")
    async def service_status() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "healthy"}

    return app


def _status_for(exc: GalleryError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
