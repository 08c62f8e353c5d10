"""Validation rules for incoming image uploads."""

from dataclasses import dataclass, field
from pathlib import PurePath

from photo_gallery.domain.errors import ValidationError
from photo_gallery.domain.photos import UploadedImage

MAX_TITLE_LENGTH = 200

_CONTENT_TYPE_ALIASES = {"image/jpg": "image/jpeg", "image/pjpeg": "image/jpeg"}

_SIGNATURES = {
    "image/jpeg": (b"\xff\xd8\xff",),
    "image/png": (b"\x89PNG\r\n\x1a\n",),
}


def normalize_content_type(raw: str | None) -> str:
    """Lower-case a MIME type, drop parameters and resolve known aliases."""
    if not raw:
        return ""
    cleaned = raw.split(";", 1)[0].strip().lower()
    return _CONTENT_TYPE_ALIASES.get(cleaned, cleaned)


def clean_title(title: str | None, filename: str | None = None) -> str:
    """Return a usable title, falling back to the filename stem."""
    cleaned = (title or "").strip()
    if not cleaned and filename:
        cleaned = PurePath(filename).stem.strip()
    if not cleaned:
        raise ValidationError("Title must not be empty", field="title")
    if len(cleaned) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title exceeds {MAX_TITLE_LENGTH} characters",
            field="title",
            value=len(cleaned),
        )
    return cleaned


@dataclass
class UploadValidator:
    """Checks content type, size and file signature of an upload."""

    max_bytes: int = 10 * 1024 * 1024
    allowed_content_types: set[str] = field(
        default_factory=lambda: {"image/jpeg", "image/png"}
    )

    def validate(self, image: UploadedImage) -> str:
        """Validate an upload and return its normalized content type."""
        content_type = normalize_content_type(image.content_type)
        if content_type not in self.allowed_content_types:
            allowed = ", ".join(sorted(self.allowed_content_types))
            raise ValidationError(
                f"Unsupported content type; allowed: {allowed}",
                field="content_type",
                value=image.content_type,
            )
        size = len(image.content)
        if size == 0:
            raise ValidationError("Uploaded file is empty", field="content")
        if size > self.max_bytes:
            raise ValidationError(
                f"File size exceeds {self.max_bytes // (1024 * 1024)}MB limit",
                field="size",
                value=size,
            )
        signatures = _SIGNATURES.get(content_type)
        if signatures and not image.content.startswith(signatures):
            raise ValidationError(
                f"File content does not match {content_type}", field="content"
            )
        return content_type
