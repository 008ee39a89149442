"""
Footy Arena - Room Lifecycle Controller

Creates rooms, handles join/rejoin with lock and capacity checks, and the
host-only lobby actions (lock, kick, transfer host, start).

None of the multi-step operations are transactional. ``create_room`` is
two writes (room, then host membership) and ``join_room`` is
count-then-upsert, so concurrent joins near capacity can both pass the
check. The store's row-level last-write-wins is the only arbitration.
"""

from __future__ import annotations

import logging

from postgrest.exceptions import APIError
from supabase import Client

from footy_arena.auth.session import SessionContext
from footy_arena.config.settings import Settings, get_settings
from footy_arena.database.models import (
    PlayerStatus,
    Room,
    RoomPlayer,
    RoomSettings,
    RoomStatus,
    Visibility,
)
from footy_arena.database.profiles import ProfileManager
from footy_arena.database.room_players import RoomPlayerManager
from footy_arena.database.rooms import RoomManager
from footy_arena.rooms.codes import generate_room_code, normalize_room_code
from footy_arena.rooms.errors import (
    InsufficientPlayers,
    InvalidRoomSettings,
    JoinError,
    NotAMember,
    RoomCreateError,
    RoomFull,
    RoomLocked,
    RoomNotFound,
    RoomNotWaiting,
)
from footy_arena.rooms.game_types import get_game_type
from footy_arena.rooms.state import MIN_PLAYERS_TO_START

logger = logging.getLogger(__name__)


def _validate_settings(settings: RoomSettings) -> None:
    values = [settings.rounds, settings.time_per_question]
    if settings.max_players is not None:
        values.append(settings.max_players)
    if any(v < 1 for v in values):
        raise InvalidRoomSettings()


class RoomController:
    """Room lifecycle operations against the Supabase tables."""

    def __init__(self, client: Client, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or get_settings()
        self.rooms = RoomManager(client)
        self.members = RoomPlayerManager(client)
        self.profiles = ProfileManager(client)

    # -- Lookup ----------------------------------------------------------

    def get_room(self, code: str) -> Room:
        """Fetch a room by code, raising RoomNotFound if absent."""
        code = normalize_room_code(code)
        room = self.rooms.get_by_code(code)
        if room is None:
            raise RoomNotFound(code)
        return room

    def fetch_roster(self, room_id: str) -> list[RoomPlayer]:
        """Full membership list joined against profiles by player id."""
        players = self.members.list_by_room(str(room_id))
        profiles = self.profiles.list_by_ids(str(p.player_id) for p in players)
        return [
            p.model_copy(update={"profile": profiles.get(str(p.player_id))})
            for p in players
        ]

    # -- Create / join ---------------------------------------------------

    def create_room(
        self,
        session: SessionContext,
        game_type: str,
        settings: RoomSettings,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> Room:
        """Create a waiting room with the caller as host and first member.

        Raises:
            InvalidGameType: If game_type is not in the catalog
            InvalidRoomSettings: If any setting is below 1
            RoomCreateError: If either write fails. A failure on the
                membership write leaves the room row behind.
        """
        get_game_type(game_type)
        _validate_settings(settings)

        code = generate_room_code()
        try:
            room = self.rooms.create(
                room_code=code,
                host_id=session.user_id,
                game_type=game_type,
                settings=settings,
                visibility=visibility,
            )
        except APIError as e:
            logger.exception("Room insert failed for host %s", session.user_id)
            raise RoomCreateError() from e

        try:
            self.members.add(str(room.id), session.user_id, join_order=1)
        except APIError as e:
            logger.error(
                "Room %s (%s) created without its host member: %s",
                room.room_code, room.id, e.message,
            )
            raise RoomCreateError() from e

        logger.info(
            "Created room %s (%s) game=%s host=%s",
            room.room_code, room.id, game_type, session.user_id,
        )
        return room

    def join_room(self, session: SessionContext, code: str) -> Room:
        """Join, or rejoin, a room by code.

        A rejoin updates the existing membership row but still receives
        ``join_order = count + 1``. A current member rejoining is never
        turned away for capacity, since they already hold a seat.

        Raises:
            RoomNotFound: No room has this code
            RoomLocked: The room is locked (checked before capacity)
            RoomFull: A newcomer found the room at max_players
            JoinError: The store rejected the count or upsert
        """
        code = normalize_room_code(code)
        logger.info("Player %s joining room %s", session.user_id, code)

        try:
            room = self.rooms.get_by_code(code)
        except APIError as e:
            logger.exception("Room lookup failed for %s", code)
            raise JoinError(f"Database error: {e.message}") from e

        if room is None:
            logger.warning("Room not found for code %s", code)
            raise RoomNotFound(code)

        if room.is_locked:
            logger.warning("Room %s is locked", code)
            raise RoomLocked()

        room_id = str(room.id)
        try:
            existing = self.members.get(room_id, session.user_id)
            count = self.members.count_in_room(room_id)
        except APIError as e:
            logger.exception("Count query failed for room %s", room_id)
            raise JoinError(f"Failed to check player count: {e.message}") from e

        # A current member already holds a seat; only newcomers need one
        max_players = room.settings.capacity(self.settings.default_max_players)
        if existing is None and count >= max_players:
            logger.warning("Room %s is full (%d/%d)", code, count, max_players)
            raise RoomFull(count, max_players)

        try:
            self.members.upsert(
                room_id,
                session.user_id,
                join_order=count + 1,
                status=PlayerStatus.CONNECTED,
            )
        except APIError as e:
            logger.exception("Join upsert failed for room %s", room_id)
            raise JoinError(f"Failed to join room: {e.message}") from e

        logger.info("Player %s joined room %s as #%d", session.user_id, code, count + 1)
        return room

    # -- Host actions ----------------------------------------------------

    def toggle_lock(self, room: Room) -> Room:
        """Flip the lock flag relative to the given room state."""
        updated = self.rooms.set_locked(str(room.id), not room.is_locked)
        logger.info("Room %s locked=%s", room.room_code, updated.is_locked)
        return updated

    def kick_player(self, room: Room, target_player_id: str) -> None:
        """Remove a member unconditionally."""
        self.members.remove(str(room.id), str(target_player_id))
        logger.info("Kicked %s from room %s", target_player_id, room.room_code)

    def transfer_host(self, room: Room, target_player_id: str) -> Room:
        """Hand host authority to another player.

        Raises:
            NotAMember: If the target is not in the room and
                ``allow_non_member_host_transfer`` is off
        """
        room_id = str(room.id)
        target = str(target_player_id)
        if not self.settings.allow_non_member_host_transfer:
            if self.members.get(room_id, target) is None:
                raise NotAMember(room_id, target)

        updated = self.rooms.set_host(room_id, target)
        logger.info("Room %s host %s -> %s", room.room_code, room.host_id, target)
        return updated

    def leave_room(self, room: Room, session: SessionContext) -> None:
        self.members.remove(str(room.id), session.user_id)
        logger.info("Player %s left room %s", session.user_id, room.room_code)

    def start_game(self, room: Room) -> Room:
        """Move a waiting room to playing and lock it.

        Raises:
            RoomNotWaiting: If the room already left the lobby
            InsufficientPlayers: If fewer than two members are present
        """
        if room.status != RoomStatus.WAITING:
            raise RoomNotWaiting(room.status.value)

        count = self.members.count_in_room(str(room.id))
        if count < MIN_PLAYERS_TO_START:
            raise InsufficientPlayers(count, MIN_PLAYERS_TO_START)

        updated = self.rooms.update_status(str(room.id), RoomStatus.PLAYING, lock=True)
        logger.info("Room %s started with %d players", room.room_code, count)
        return updated
