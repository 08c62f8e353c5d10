"""Time-limited public share links for photos."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Protocol
from uuid import UUID

from photo_gallery.domain.errors import NotFoundError, UnavailableError
from photo_gallery.domain.photos import LifecycleState, PhotoRecord
from photo_gallery.domain.shares import MintedShareLink, ShareLinkRecord
from photo_gallery.services.clock import Clock, SystemClock
from photo_gallery.services.photos import PhotoRepository

_logger = logging.getLogger(__name__)

MAX_MINT_ATTEMPTS = 5


def generate_token() -> str:
    """Return a URL-safe token with 256 bits of entropy."""
    return secrets.token_urlsafe(32)


class ShareLinkRepository(Protocol):
    """Persistence interface for share links."""

    def create_link(self, link: ShareLinkRecord) -> bool:
        """Insert a link unless its token already exists.

        Returns False on a token collision.
        """

    def get_link(self, token: str) -> ShareLinkRecord | None:
        """Return a link by token, if present."""


@dataclass
class ShareLinkService:
    """Mints and resolves share tokens against the photo lifecycle."""

    repository: ShareLinkRepository
    photo_repository: PhotoRepository
    clock: Clock = field(default_factory=SystemClock)
    link_lifetime: timedelta = timedelta(hours=3)
    token_factory: Callable[[], str] = generate_token

    def mint(self, photo_id: UUID) -> MintedShareLink:
        """Create a new share link for an active photo."""
        photo = self.photo_repository.get_photo(photo_id)
        if photo is None or photo.state is not LifecycleState.ACTIVE:
            raise NotFoundError("photo", photo_id)

        issued_at = self.clock.now()
        expires_at = issued_at + self.link_lifetime
        for attempt in range(1, MAX_MINT_ATTEMPTS + 1):
            link = ShareLinkRecord(
                token=self.token_factory(),
                photo_id=photo_id,
                issued_at=issued_at,
                expires_at=expires_at,
            )
            if self.repository.create_link(link):
                _logger.info(
                    "Share link minted: photo_id=%s expires_at=%s",
                    photo_id,
                    expires_at.isoformat(),
                )
                return MintedShareLink(token=link.token, expires_at=expires_at)
            _logger.warning(
                "Share token collision (attempt %s/%s)", attempt, MAX_MINT_ATTEMPTS
            )
        raise UnavailableError("Could not allocate a unique share token")

    def resolve(self, token: str) -> PhotoRecord:
        """Return the current state of the photo behind a live token."""
        link = self.repository.get_link(token)
        if link is None or link.is_expired(self.clock.now()):
            raise NotFoundError("share link")
        photo = self.photo_repository.get_photo(link.photo_id)
        if photo is None or photo.state is not LifecycleState.ACTIVE:
            raise NotFoundError("share link")
        return photo
