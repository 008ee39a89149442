"""
Footy Arena - Logging Configuration

Attaches a single stream handler to the package logger. Modules log
through ``logging.getLogger(__name__)`` and inherit this setup.
"""

from __future__ import annotations

import logging

from footy_arena.config.settings import Settings

_PACKAGE_LOGGER = "footy_arena"
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """Configure the ``footy_arena`` logger from settings.

    Safe to call on every Streamlit rerun: the handler is only added once.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logger.setLevel(level)

    if not any(getattr(h, "_footy_arena", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._footy_arena = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.propagate = False
    return logger
