"""Domain models for public share links."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ShareLinkRecord:
    """Represents a persisted share link."""

    token: str
    photo_id: UUID
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Return True once the link is past its expiry."""
        return now > self.expires_at


@dataclass(frozen=True)
class MintedShareLink:
    """Token and expiry handed back to the caller that minted a link."""

    token: str
    expires_at: datetime
