"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    photos_table: str = "photos"
    share_links_table: str = "share_links"
    storage_bucket: str = "photos"
    share_link_ttl_seconds: int = 3 * 60 * 60
    share_base_url: str = ""
    retention_days: int = 30
    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_content_types: str = "image/jpeg,image/png"
    max_page_size: int = 100
    thumbnail_width: int = 600
    thumbnail_height: int = 400
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_content_types(raw: str | None) -> set[str]:
    """Parse the comma-separated list of accepted upload MIME types."""
    if raw is None:
        return set()
    types: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value:
            types.add(value)
    return types
