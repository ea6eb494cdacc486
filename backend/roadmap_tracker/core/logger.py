"""
Logging setup.

All modules obtain their logger through ``setup_logger(__name__)`` so the
level and format follow ``LOG_LEVEL`` from settings.
"""

import logging

from roadmap_tracker.core.config import get_settings

_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """Configure the package root logger once at application start."""
    settings = get_settings()
    root = logging.getLogger("roadmap_tracker")
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
