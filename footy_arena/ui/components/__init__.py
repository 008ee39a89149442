"""UI components for Footy Arena."""

from footy_arena.ui.components.roster import render_roster

__all__ = ["render_roster"]
