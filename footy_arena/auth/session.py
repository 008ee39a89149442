"""
Footy Arena - Session Context

Explicit identity passed to every room operation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """
    The signed-in player performing an action.

    Attributes:
        user_id: Identity id issued by Supabase Auth (also the profile id)
        username: Profile username, if the profile has been loaded
    """
    user_id: str
    username: str | None = None
