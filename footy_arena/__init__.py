"""Footy Arena - multiplayer football trivia party game."""

__version__ = "0.1.0"
