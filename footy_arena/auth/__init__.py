"""
Footy Arena Identity.

Anonymous Supabase Auth sessions and username profiles.
"""

from footy_arena.auth.identity import IdentityService, validate_username
from footy_arena.auth.session import SessionContext

__all__ = ["IdentityService", "SessionContext", "validate_username"]
