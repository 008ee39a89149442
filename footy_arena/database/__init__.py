"""
Footy Arena Database Layer.

Supabase integration for profiles, rooms, and room membership.
"""

from footy_arena.database.client import get_supabase_client
from footy_arena.database.models import (
    PlayerStatus,
    Profile,
    Room,
    RoomPlayer,
    RoomSettings,
    RoomStatus,
    Visibility,
)
from footy_arena.database.profiles import ProfileManager
from footy_arena.database.room_players import RoomPlayerManager
from footy_arena.database.rooms import RoomManager

__all__ = [
    "get_supabase_client",
    "PlayerStatus",
    "Profile",
    "ProfileManager",
    "Room",
    "RoomManager",
    "RoomPlayer",
    "RoomPlayerManager",
    "RoomSettings",
    "RoomStatus",
    "Visibility",
]
