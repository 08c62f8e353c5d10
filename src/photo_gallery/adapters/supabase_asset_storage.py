"""Supabase Storage bucket for photo bytes."""

from dataclasses import dataclass
from uuid import UUID

import httpx
from storage3.utils import StorageException
from supabase import Client

from photo_gallery.domain.errors import UnavailableError
from photo_gallery.domain.photos import StoredAsset
from photo_gallery.services.photos import AssetStorage

_EXTENSIONS = {"image/jpeg": "jpg", "image/png": "png"}


@dataclass
class SupabaseAssetStorage(AssetStorage):
    """Stores originals in a bucket and serves thumbnails via image transforms."""

    client: Client
    bucket: str = "photos"
    thumbnail_width: int = 600
    thumbnail_height: int = 400

    def store(self, photo_id: UUID, content: bytes, content_type: str) -> StoredAsset:
        """Upload image bytes and return public URIs."""
        extension = _EXTENSIONS.get(content_type, "bin")
        storage_key = f"originals/{photo_id}.{extension}"
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(
                path=storage_key,
                file=content,
                file_options={"content-type": content_type},
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise UnavailableError("Failed to upload photo bytes") from exc
        original_uri = bucket.get_public_url(storage_key)
        thumbnail_uri = bucket.get_public_url(
            storage_key,
            {
                "transform": {
                    "width": self.thumbnail_width,
                    "height": self.thumbnail_height,
                    "resize": "cover",
                }
            },
        )
        return StoredAsset(
            storage_key=storage_key,
            original_uri=original_uri,
            thumbnail_uri=thumbnail_uri,
        )

    def delete(self, storage_key: str) -> None:
        """Remove an object from the bucket."""
        try:
            self.client.storage.from_(self.bucket).remove([storage_key])
        except (StorageException, httpx.HTTPError) as exc:
            raise UnavailableError("Failed to remove photo bytes") from exc
