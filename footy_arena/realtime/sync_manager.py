"""
Footy Arena - Room Sync Adapter

Keeps one viewer's LobbyState current. A pushed `rooms` update replaces
the local room row (last write wins, no merge). Any `room_players` change
marks the roster stale; the next `sync_pending` call re-fetches it in full
rather than merging, which makes the adapter indifferent to duplicate or
out-of-order notifications. Room events also queue short notices for the
lobby to show.
Falls back to polling when the WebSocket subscription cannot be opened.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from postgrest.exceptions import APIError
from pydantic import ValidationError as ModelValidationError
from supabase import Client

from footy_arena.config.settings import get_settings
from footy_arena.database.models import Room
from footy_arena.realtime.events import (
    PLAYER_EVENTS,
    ROOM_EVENTS,
    EventPayload,
    notice_for,
)
from footy_arena.realtime.subscriptions import ChannelManager
from footy_arena.rooms.controller import RoomController
from footy_arena.rooms.state import LobbyState, apply_room_update, apply_roster

logger = logging.getLogger(__name__)

StateListener = Callable[[LobbyState], None]


class RoomSync:
    """Realtime view of a single room for a single viewer.

    Only one room is active at a time. Anything that arrives for a room
    that is no longer active (a late fetch, a queued notification) is
    dropped instead of mutating state.
    """

    def __init__(
        self,
        client: Client,
        controller: RoomController | None = None,
        *,
        poll_interval: float | None = None,
    ) -> None:
        self._client = client
        self._controller = controller or RoomController(client)
        self._channel_mgr = ChannelManager(client)
        self._poll_interval = (
            poll_interval
            if poll_interval is not None
            else get_settings().realtime_poll_interval
        )
        self._lock = threading.RLock()
        self._state: LobbyState | None = None
        self._listener: StateListener | None = None
        self._poll_stop: threading.Event | None = None
        self._roster_dirty = False
        self._notices: list[str] = []

    # -- Public API ------------------------------------------------------

    @property
    def state(self) -> LobbyState | None:
        with self._lock:
            return self._state

    @property
    def active_room_code(self) -> str | None:
        with self._lock:
            return self._state.room.room_code if self._state else None

    @property
    def is_polling(self) -> bool:
        return self._poll_stop is not None and not self._poll_stop.is_set()

    def open(
        self,
        room_code: str,
        viewer_id: str | None,
        on_change: StateListener | None = None,
        *,
        use_polling_fallback: bool = True,
    ) -> LobbyState:
        """Load a room and start following its changes.

        Closes any previously open room first.

        Raises:
            RoomNotFound: If no room has this code
        """
        self.close()

        room = self._controller.get_room(room_code)
        players = self._controller.fetch_roster(str(room.id))
        state = LobbyState(room=room, players=tuple(players), viewer_id=viewer_id)

        with self._lock:
            self._state = apply_roster(state, room.id, players)
            self._listener = on_change

        try:
            self._channel_mgr.subscribe(room.room_code, str(room.id), self.handle_event)
            logger.info("Realtime subscription active for room %s", room.room_code)
        except Exception:
            logger.exception("WebSocket subscription failed for room %s", room.room_code)
            if not use_polling_fallback:
                raise
            logger.info("Falling back to polling for room %s", room.room_code)
            self._start_polling(room.room_code)

        return self._state

    def close(self) -> None:
        """Stop following the current room, if any."""
        with self._lock:
            code = self._state.room.room_code if self._state else None
            self._state = None
            self._listener = None
            self._roster_dirty = False
            self._notices = []
        self._stop_polling()
        if code:
            self._channel_mgr.unsubscribe(code)

    def shutdown(self) -> None:
        self.close()
        self._channel_mgr.shutdown()

    def refresh(self) -> LobbyState | None:
        """Re-read the room row and roster from the store."""
        state = self.state
        if state is None:
            return None
        room = self._controller.rooms.get_by_id(state.room_id)
        if room is not None:
            self._update(lambda s: apply_room_update(s, room), state.room.room_code)
        return self.refresh_roster()

    def refresh_roster(self) -> LobbyState | None:
        """Re-fetch the full roster for the active room."""
        state = self.state
        if state is None:
            return None
        room_id = state.room_id
        players = self._controller.fetch_roster(room_id)
        return self._update(lambda s: apply_roster(s, room_id, players), state.room.room_code)

    # -- Change feed -----------------------------------------------------

    def handle_event(self, payload: EventPayload) -> None:
        """Apply one change-feed notification to the active room.

        Runs on the Realtime loop thread, so it never touches the store.
        Roster changes only mark the roster stale; `sync_pending` does the
        re-fetch from the caller's thread.
        """
        with self._lock:
            state = self._state
        if state is None or payload.room_code != state.room.room_code:
            logger.debug("Dropping event for inactive room %s", payload.room_code)
            return

        if payload.event in ROOM_EVENTS:
            try:
                room = Room.model_validate(payload.record)
            except ModelValidationError:
                logger.warning("Ignoring malformed room row for %s", payload.room_code)
                return
            self._update(lambda s: apply_room_update(s, room), payload.room_code)
        elif payload.event in PLAYER_EVENTS:
            with self._lock:
                self._roster_dirty = True

        notice = notice_for(payload, state.viewer_id)
        if notice:
            with self._lock:
                self._notices.append(notice)

    def sync_pending(self) -> LobbyState | None:
        """Re-fetch the roster if a change notification marked it stale."""
        with self._lock:
            dirty = self._roster_dirty
            self._roster_dirty = False
        if not dirty:
            return self.state
        try:
            return self.refresh_roster()
        except APIError:
            logger.exception("Roster re-fetch failed, will retry")
            with self._lock:
                self._roster_dirty = True
            return self.state

    def pop_notices(self) -> list[str]:
        """Return and clear the messages queued by change notifications."""
        with self._lock:
            notices, self._notices = self._notices, []
        return notices

    def _update(
        self, reducer: Callable[[LobbyState], LobbyState], room_code: str
    ) -> LobbyState | None:
        """Apply a reducer if ``room_code`` is still the active room."""
        with self._lock:
            if self._state is None or self._state.room.room_code != room_code:
                return self._state
            new_state = reducer(self._state)
            changed = new_state is not self._state
            self._state = new_state
            listener = self._listener

        if changed and listener is not None:
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed for room %s", room_code)
        return new_state

    # -- Polling fallback ------------------------------------------------

    def _start_polling(self, room_code: str) -> None:
        stop_event = threading.Event()
        self._poll_stop = stop_event
        thread = threading.Thread(
            target=self._poll_loop,
            args=(room_code, stop_event),
            daemon=True,
            name=f"poll-{room_code}",
        )
        thread.start()

    def _stop_polling(self) -> None:
        if self._poll_stop is not None:
            self._poll_stop.set()
            self._poll_stop = None

    def _poll_loop(self, room_code: str, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._poll_interval):
            if self.active_room_code != room_code:
                return
            try:
                self.refresh()
            except Exception:
                logger.exception("Polling error for room %s", room_code)
