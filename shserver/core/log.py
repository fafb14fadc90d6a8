"""Process-wide logging configuration."""

from __future__ import annotations

import logging

from shserver.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else settings.logging.level.upper()
    logging.basicConfig(level=level, format=settings.logging.format)


__all__ = ["configure_logging"]
