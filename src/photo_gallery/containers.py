"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from photo_gallery.adapters.supabase_asset_storage import SupabaseAssetStorage
from photo_gallery.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_gallery.adapters.supabase_share_link_repository import (
    SupabaseShareLinkRepository,
)
from photo_gallery.config import Settings, parse_allowed_content_types
from photo_gallery.services.clock import Clock, SystemClock
from photo_gallery.services.photos import PhotoLifecycleService
from photo_gallery.services.retention import RetentionService
from photo_gallery.services.shares import ShareLinkService
from photo_gallery.services.uploads import UploadValidator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    photo_service: PhotoLifecycleService
    share_link_service: ShareLinkService
    retention_service: RetentionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, clock: Clock | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    photo_repository = SupabasePhotoRepository(
        supabase_client, table_name=resolved_settings.photos_table
    )
    share_link_repository = SupabaseShareLinkRepository(
        supabase_client, table_name=resolved_settings.share_links_table
    )
    asset_storage = SupabaseAssetStorage(
        supabase_client,
        bucket=resolved_settings.storage_bucket,
        thumbnail_width=resolved_settings.thumbnail_width,
        thumbnail_height=resolved_settings.thumbnail_height,
    )
    photo_service = PhotoLifecycleService(
        repository=photo_repository,
        storage=asset_storage,
        clock=resolved_clock,
        validator=UploadValidator(
            max_bytes=resolved_settings.max_upload_bytes,
            allowed_content_types=parse_allowed_content_types(
                resolved_settings.allowed_content_types
            ),
        ),
        retention=timedelta(days=resolved_settings.retention_days),
        max_page_size=resolved_settings.max_page_size,
    )
    share_link_service = ShareLinkService(
        repository=share_link_repository,
        photo_repository=photo_repository,
        clock=resolved_clock,
        link_lifetime=timedelta(seconds=resolved_settings.share_link_ttl_seconds),
    )
    retention_service = RetentionService(photo_service)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        clock=resolved_clock,
        photo_service=photo_service,
        share_link_service=share_link_service,
        retention_service=retention_service,
        close_resources=close_resources,
    )
