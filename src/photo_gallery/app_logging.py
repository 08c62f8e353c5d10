"""Logging setup for the gallery service."""

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(name: str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""
    levels = logging.getLevelNamesMapping()
    try:
        return levels[name.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}") from None


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the ``photo_gallery`` logger.

    Repeated calls only adjust the level, so building several apps in one
    process does not duplicate output.
    """
    logger = logging.getLogger("photo_gallery")
    logger.setLevel(resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
