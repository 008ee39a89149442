"""
Footy Arena - Realtime Event Definitions

Event types and payloads for room and roster changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class RoomEvent(Enum):
    """Changes a lobby can observe."""

    PLAYER_JOINED = auto()
    PLAYER_LEFT = auto()
    PLAYER_UPDATED = auto()
    GAME_STARTED = auto()
    GAME_FINISHED = auto()
    HOST_CHANGED = auto()
    LOCK_CHANGED = auto()
    ROOM_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for realtime event data."""

    event: RoomEvent
    room_code: str
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def table(self) -> str | None:
        return self.data.get("table")

    @property
    def record(self) -> dict[str, Any]:
        return self.data.get("record") or {}


# Map database change patterns to room events
_ROOM_STATUS_MAP: dict[str, RoomEvent] = {
    "playing": RoomEvent.GAME_STARTED,
    "finished": RoomEvent.GAME_FINISHED,
}

_PLAYER_EVENT_MAP: dict[str, RoomEvent] = {
    "INSERT": RoomEvent.PLAYER_JOINED,
    "DELETE": RoomEvent.PLAYER_LEFT,
    "UPDATE": RoomEvent.PLAYER_UPDATED,
}


def classify_room_change(
    change_type: str, record: dict[str, Any], old_record: dict[str, Any]
) -> RoomEvent | None:
    """Determine the event from a rooms table change.

    Only updates matter; inserts and deletes of room rows are not pushed
    into an open lobby.
    """
    if change_type != "UPDATE":
        return None

    # old_record only carries full columns with REPLICA IDENTITY FULL
    new_status = record.get("status")
    if (
        "status" in old_record
        and new_status != old_record["status"]
        and new_status in _ROOM_STATUS_MAP
    ):
        return _ROOM_STATUS_MAP[new_status]
    if "host_id" in old_record and record.get("host_id") != old_record.get("host_id"):
        return RoomEvent.HOST_CHANGED
    if "is_locked" in old_record and record.get("is_locked") != old_record.get("is_locked"):
        return RoomEvent.LOCK_CHANGED
    return RoomEvent.ROOM_UPDATED


def classify_player_change(
    change_type: str, record: dict[str, Any], old_record: dict[str, Any]
) -> RoomEvent | None:
    """Determine the event from a room_players table change."""
    return _PLAYER_EVENT_MAP.get(change_type)


ROOM_EVENTS = frozenset({
    RoomEvent.GAME_STARTED,
    RoomEvent.GAME_FINISHED,
    RoomEvent.HOST_CHANGED,
    RoomEvent.LOCK_CHANGED,
    RoomEvent.ROOM_UPDATED,
})

PLAYER_EVENTS = frozenset({
    RoomEvent.PLAYER_JOINED,
    RoomEvent.PLAYER_LEFT,
    RoomEvent.PLAYER_UPDATED,
})


def notice_for(payload: EventPayload, viewer_id: str | None) -> str | None:
    """Short message to show a viewer for an event, if any."""
    event = payload.event
    if event == RoomEvent.GAME_STARTED:
        return "The game has started!"
    if event == RoomEvent.GAME_FINISHED:
        return "The game has finished."
    if event == RoomEvent.HOST_CHANGED:
        if viewer_id and str(payload.record.get("host_id")) == viewer_id:
            return "You are now the host."
        return "The host has changed."
    if event == RoomEvent.LOCK_CHANGED:
        if payload.record.get("is_locked"):
            return "The room is now locked."
        return "The room is now unlocked."
    if event == RoomEvent.PLAYER_LEFT and viewer_id and payload.player_id == viewer_id:
        return "You were removed from the room."
    return None
