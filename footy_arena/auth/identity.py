"""
Footy Arena - Identity Service

Anonymous sign-in backed by Supabase Auth, plus the `profiles` record
that gives each identity a unique username.
"""

from __future__ import annotations

import logging
import re
import secrets
from typing import Any, Callable

from postgrest.exceptions import APIError
from supabase import AuthError, Client

from footy_arena.auth.session import SessionContext
from footy_arena.database.profiles import ProfileManager
from footy_arena.rooms.errors import (
    AuthenticationError,
    InvalidUsername,
    UsernameTaken,
)

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,16}$")

AVATAR_COLORS: tuple[str, ...] = (
    "#22c55e", "#3b82f6", "#f59e0b", "#ef4444", "#8b5cf6",
    "#ec4899", "#14b8a6", "#f97316", "#06b6d4", "#84cc16",
)

# Postgres unique_violation
_UNIQUE_VIOLATION = "23505"


def validate_username(raw: str) -> str:
    """Trim and validate a username, raising InvalidUsername if malformed."""
    username = (raw or "").strip()
    if not USERNAME_PATTERN.match(username):
        raise InvalidUsername()
    return username


def random_avatar_color() -> str:
    return secrets.choice(AVATAR_COLORS)


def _is_duplicate(error: APIError) -> bool:
    return error.code == _UNIQUE_VIOLATION or "duplicate" in (error.message or "")


def _user_id(session: Any) -> str | None:
    user = getattr(session, "user", None)
    return str(user.id) if user is not None else None


class IdentityService:
    """Wraps Supabase Auth and the profile table."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.profiles = ProfileManager(client)

    # -- Raw identity contract ------------------------------------------

    def sign_in_anonymous(self) -> str:
        """Create an anonymous identity and return its id."""
        try:
            response = self.client.auth.sign_in_anonymously()
        except AuthError as e:
            logger.exception("Anonymous sign-in failed")
            raise AuthenticationError(str(e)) from e
        if response.user is None:
            raise AuthenticationError()
        return str(response.user.id)

    def get_current_session(self) -> str | None:
        """Return the current identity id, or None when signed out."""
        return _user_id(self.client.auth.get_session())

    def on_session_change(self, callback: Callable[[str | None], None]) -> Any:
        """Invoke ``callback`` with the identity id whenever auth state changes.

        Returns:
            The Supabase subscription; call ``.unsubscribe()`` to stop.
        """
        def _listener(event: str, session: Any) -> None:
            logger.debug("Auth state change: %s", event)
            callback(_user_id(session))

        return self.client.auth.on_auth_state_change(_listener)

    def sign_out(self) -> None:
        self.client.auth.sign_out()

    # -- Username flow ---------------------------------------------------

    def sign_in(self, username: str) -> SessionContext:
        """Claim a username and sign in anonymously.

        Args:
            username: Requested username (trimmed before validation)

        Returns:
            SessionContext for the new identity

        Raises:
            InvalidUsername: If the username is malformed
            UsernameTaken: If another profile already owns it
            AuthenticationError: If Supabase rejects the sign-in
        """
        username = validate_username(username)

        if self.profiles.get_by_username(username) is not None:
            raise UsernameTaken()

        user_id = self.sign_in_anonymous()

        try:
            self.profiles.create(user_id, username, random_avatar_color())
        except APIError as e:
            # Lost the race for the username, or the insert was rejected
            self.sign_out()
            if _is_duplicate(e):
                raise UsernameTaken() from e
            logger.exception("Profile creation failed for %s", user_id)
            raise AuthenticationError(e.message) from e

        logger.info("Signed in %s as %s", user_id, username)
        return SessionContext(user_id=user_id, username=username)

    def restore_session(self) -> SessionContext | None:
        """Rebuild the SessionContext for an existing Supabase session."""
        user_id = self.get_current_session()
        if user_id is None:
            return None
        profile = self.profiles.get(user_id)
        return SessionContext(
            user_id=user_id,
            username=profile.username if profile else None,
        )
