"""
Footy Arena - Lobby View State

Merges the two change streams (room row, membership rows) into one
immutable view model. Pure functions only; no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from uuid import UUID

from footy_arena.database.models import Room, RoomPlayer, RoomStatus

MIN_PLAYERS_TO_START = 2


@dataclass(frozen=True)
class LobbyState:
    """
    Latest known state of one room as seen by one viewer.

    Attributes:
        room: Last room row received (last write wins)
        players: Roster ordered by join_order
        viewer_id: Identity of the local player, if signed in
    """
    room: Room
    players: tuple[RoomPlayer, ...] = field(default_factory=tuple)
    viewer_id: str | None = None

    @property
    def room_id(self) -> str:
        return str(self.room.id)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_host(self) -> bool:
        return self.viewer_id is not None and str(self.room.host_id) == str(self.viewer_id)

    @property
    def host_player(self) -> RoomPlayer | None:
        return next(
            (p for p in self.players if p.player_id == self.room.host_id), None
        )

    @property
    def is_member(self) -> bool:
        if self.viewer_id is None:
            return False
        return any(str(p.player_id) == str(self.viewer_id) for p in self.players)

    @property
    def can_start(self) -> bool:
        return (
            self.room.status == RoomStatus.WAITING
            and self.player_count >= MIN_PLAYERS_TO_START
        )


def _same_room(a: UUID | str, b: UUID | str) -> bool:
    return str(a) == str(b)


def apply_room_update(state: LobbyState, room: Room) -> LobbyState:
    """Replace the room row. Rows for a different room are ignored."""
    if not _same_room(state.room.id, room.id):
        return state
    return replace(state, room=room)


def apply_roster(
    state: LobbyState, room_id: UUID | str, players: list[RoomPlayer] | tuple[RoomPlayer, ...]
) -> LobbyState:
    """Replace the roster with a freshly fetched one.

    A fetch started for another room (for example, before the viewer
    navigated away) is dropped.
    """
    if not _same_room(state.room.id, room_id):
        return state
    ordered = tuple(sorted(players, key=lambda p: p.join_order))
    return replace(state, players=ordered)
