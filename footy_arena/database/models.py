"""
Footy Arena - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class RoomStatus(str, Enum):
    """Lifecycle of a room: waiting -> playing -> finished."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Visibility(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"


class PlayerStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class Profile(BaseModel):
    """Mirrors the `profiles` table."""

    id: UUID
    username: str = Field(min_length=3, max_length=16, pattern=r"^[A-Za-z0-9_]+$")
    avatar_color: str = "#22c55e"
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class RoomSettings(BaseModel):
    """The JSON `settings` column of a room.

    ``max_players`` may be missing on older rows; callers fall back to the
    configured default capacity.
    """

    max_players: int | None = None
    rounds: int = 5
    time_per_question: int = 15

    def capacity(self, default: int) -> int:
        return self.max_players if self.max_players is not None else default


class Room(BaseModel):
    """Mirrors the `rooms` table."""

    id: UUID
    room_code: str = Field(max_length=6)
    host_id: UUID
    game_type: str
    settings: RoomSettings = Field(default_factory=RoomSettings)
    status: RoomStatus = RoomStatus.WAITING
    is_locked: bool = False
    visibility: Visibility = Visibility.PRIVATE
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class RoomPlayer(BaseModel):
    """Mirrors the `room_players` table, optionally joined with a profile."""

    id: UUID
    room_id: UUID
    player_id: UUID
    join_order: int = 0
    status: PlayerStatus = PlayerStatus.CONNECTED
    score: int = 0
    joined_at: datetime | None = None
    profile: Profile | None = None

    model_config = {"from_attributes": True}

    @property
    def display_name(self) -> str:
        return self.profile.username if self.profile else "Unknown"
