"""Retention sweep for photos left in the recycle bin."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from photo_gallery.domain.errors import InvalidStateError, NotFoundError
from photo_gallery.services.photos import PhotoLifecycleService

_logger = logging.getLogger(__name__)


@dataclass
class RetentionService:
    """Purges recycled photos once their retention window has passed."""

    photo_service: PhotoLifecycleService

    def sweep(self, as_of: datetime | None = None) -> list[UUID]:
        """Purge every photo eligible at ``as_of`` and return their ids."""
        cutoff_time = as_of or self.photo_service.clock.now()
        purged: list[UUID] = []
        for photo in self.photo_service.list_purgeable(cutoff_time):
            try:
                self.photo_service.purge_forever(photo.id)
            except (InvalidStateError, NotFoundError) as exc:
                # Recovered or purged concurrently.
                _logger.warning("Retention sweep skipped %s: %s", photo.id, exc)
                continue
            purged.append(photo.id)
        _logger.info(
            "Retention sweep as_of=%s purged=%s", cutoff_time.isoformat(), len(purged)
        )
        return purged
