"""Shared helpers for Supabase-backed adapters."""

from datetime import datetime

import httpx
from postgrest.exceptions import APIError

from photo_gallery.domain.errors import UnavailableError

UNIQUE_VIOLATION = "23505"


def execute(query, action: str):  # type: ignore[no-untyped-def]
    """Run a PostgREST query, mapping transport and API failures."""
    try:
        return query.execute()
    except APIError as exc:
        raise UnavailableError(
            f"Supabase {action} failed", {"code": exc.code or "unknown"}
        ) from exc
    except httpx.HTTPError as exc:
        raise UnavailableError(f"Supabase {action} failed") from exc


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, returning None when absent."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
