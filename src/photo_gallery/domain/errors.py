"""Error taxonomy shared by the gallery services."""

from uuid import UUID


class GalleryError(Exception):
    """Base exception for gallery operations."""

    code = "GALLERY_ERROR"

    def __init__(self, message: str, details: dict[str, object] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert the exception to a JSON-ready payload."""
        result: dict[str, object] = {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(GalleryError):
    """Raised when caller input violates a constraint."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str, value: object | None = None):
        self.field = field
        details: dict[str, object] = {"field": field}
        if value is not None:
            details["value"] = value
        super().__init__(message, details)


class NotFoundError(GalleryError):
    """Raised when an entity is unknown or not visible in its current state."""

    code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: UUID | str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        details: dict[str, object] = {"entity_type": entity_type}
        if entity_id is None:
            message = f"{entity_type.capitalize()} not found"
        else:
            message = f"{entity_type.capitalize()} '{entity_id}' not found"
            details["entity_id"] = str(entity_id)
        super().__init__(message, details)


class InvalidStateError(GalleryError):
    """Raised when a transition is requested from the wrong lifecycle state."""

    code = "INVALID_STATE"

    def __init__(self, photo_id: UUID, current: str, expected: str):
        self.photo_id = photo_id
        self.current = current
        self.expected = expected
        super().__init__(
            f"Photo '{photo_id}' is {current}, expected {expected}",
            {"photo_id": str(photo_id), "current": current, "expected": expected},
        )


class UnavailableError(GalleryError):
    """Raised when the backing store fails; safe to retry with backoff."""

    code = "UNAVAILABLE"
