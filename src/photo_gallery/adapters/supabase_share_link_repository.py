"""Supabase-backed share link repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from photo_gallery.adapters.supabase_support import UNIQUE_VIOLATION, execute
from photo_gallery.domain.errors import UnavailableError
from photo_gallery.domain.shares import ShareLinkRecord
from photo_gallery.services.shares import ShareLinkRepository


@dataclass
class SupabaseShareLinkRepository(ShareLinkRepository):
    """Supabase implementation for share links.

    The ``token`` column carries a unique constraint.
    """

    client: Client
    table_name: str = "share_links"

    def create_link(self, link: ShareLinkRecord) -> bool:
        """Insert a link row; return False if the token already exists."""
        try:
            response = (
                self.client.table(self.table_name)
                .insert(
                    {
                        "token": link.token,
                        "photo_id": str(link.photo_id),
                        "issued_at": link.issued_at.isoformat(),
                        "expires_at": link.expires_at.isoformat(),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                return False
            raise UnavailableError(
                "Supabase share link insert failed", {"code": exc.code or "unknown"}
            ) from exc
        except httpx.HTTPError as exc:
            raise UnavailableError("Supabase share link insert failed") from exc
        if not response.data:
            raise UnavailableError("Failed to create share link")
        return True

    def get_link(self, token: str) -> ShareLinkRecord | None:
        """Return a link by token, if present."""
        response = execute(
            self.client.table(self.table_name)
            .select("token, photo_id, issued_at, expires_at")
            .eq("token", token)
            .limit(1),
            "share link lookup",
        )
        if not response.data:
            return None
        row = response.data[0]
        return ShareLinkRecord(
            token=str(row["token"]),
            photo_id=UUID(str(row["photo_id"])),
            issued_at=datetime.fromisoformat(str(row["issued_at"])),
            expires_at=datetime.fromisoformat(str(row["expires_at"])),
        )
