"""
Footy Arena Configuration.

Environment variables, settings, and logging configuration.
"""

from footy_arena.config.logging import configure_logging
from footy_arena.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
