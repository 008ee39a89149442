"""
Footy Arena - Profile Manager

CRUD operations for the `profiles` table.
"""

from __future__ import annotations

from typing import Iterable

from supabase import Client

from footy_arena.database.models import Profile


class ProfileManager:
    """Manages player profiles in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("profiles")

    def create(self, user_id: str, username: str, avatar_color: str) -> Profile:
        """Insert the profile for a freshly signed-in identity."""
        data = (
            self.table
            .insert({
                "id": user_id,
                "username": username,
                "avatar_color": avatar_color,
            })
            .execute()
        )
        return Profile.model_validate(data.data[0])

    def get(self, user_id: str) -> Profile | None:
        data = (
            self.table
            .select("*")
            .eq("id", user_id)
            .execute()
        )
        if data.data:
            return Profile.model_validate(data.data[0])
        return None

    def get_by_username(self, username: str) -> Profile | None:
        """Look up a profile by its (unique) username."""
        data = (
            self.table
            .select("*")
            .eq("username", username)
            .execute()
        )
        if data.data:
            return Profile.model_validate(data.data[0])
        return None

    def list_by_ids(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        """Fetch several profiles at once, keyed by id."""
        ids = [str(uid) for uid in user_ids]
        if not ids:
            return {}
        data = (
            self.table
            .select("id, username, avatar_color")
            .in_("id", ids)
            .execute()
        )
        profiles = [Profile.model_validate(row) for row in data.data]
        return {str(p.id): p for p in profiles}
