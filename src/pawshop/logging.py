"""Shared logger for the package.

Modules either import ``logger`` from here or create their own with
``logging.getLogger(__name__)``; both end up under the ``pawshop`` tree.
"""
from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("pawshop")


def configure_logging(level: str | int | None = None) -> None:
    """Attach a stream handler to the ``pawshop`` logger once and set its level."""
    if level is None:
        from pawshop.config import settings
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
