"""
Footy Arena Rooms.

Room codes, game-type catalog, lobby view state, and the room lifecycle
controller.
"""

from footy_arena.rooms.errors import FootyArenaError
from footy_arena.rooms.codes import (
    ROOM_CODE_ALPHABET,
    generate_room_code,
    normalize_room_code,
)
from footy_arena.rooms.game_types import GAME_TYPES, GameType, GameTypeInfo, get_game_type
from footy_arena.rooms.state import LobbyState, apply_room_update, apply_roster
from footy_arena.rooms.controller import RoomController

__all__ = [
    "FootyArenaError",
    "GAME_TYPES",
    "GameType",
    "GameTypeInfo",
    "LobbyState",
    "ROOM_CODE_ALPHABET",
    "RoomController",
    "apply_room_update",
    "apply_roster",
    "generate_room_code",
    "get_game_type",
    "normalize_room_code",
]
