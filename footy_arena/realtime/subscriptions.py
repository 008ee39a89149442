"""
Footy Arena - Room Channel Subscriptions

One Supabase Realtime channel per open room, carrying postgres_changes
bindings for both `rooms` and `room_players`. The sync Supabase client
has no sync Realtime implementation, so channels live on an asyncio event
loop in a daemon thread and callbacks fire on that thread.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable

from supabase import Client

from footy_arena.realtime.events import (
    EventPayload,
    classify_player_change,
    classify_room_change,
)

logger = logging.getLogger(__name__)

EventCallback = Callable[[EventPayload], None]

_CLASSIFIERS: dict[str, Callable] = {
    "rooms": classify_room_change,
    "room_players": classify_player_change,
}

_SUBSCRIBE_TIMEOUT = 10


def _row_filter(table: str, room_code: str, room_id: str) -> str:
    # room_players has no room_code column
    if table == "rooms":
        return f"room_code=eq.{room_code}"
    return f"room_id=eq.{room_id}"


def to_payload(raw: dict[str, Any], table: str, room_code: str) -> EventPayload | None:
    """Turn a postgres_changes message into an EventPayload.

    Returns None for changes that carry nothing a lobby reacts to.
    """
    data = raw.get("data", raw)
    change_type = data.get("type", data.get("eventType", ""))
    record = data.get("record") or {}
    old_record = data.get("old_record") or {}

    classifier = _CLASSIFIERS.get(table)
    if classifier is None:
        return None
    event = classifier(change_type, record, old_record)
    if event is None:
        return None

    player_id = None
    if table == "room_players":
        # DELETE rows only survive in old_record
        player_id = record.get("player_id") or old_record.get("player_id")

    return EventPayload(
        event=event,
        room_code=room_code,
        player_id=str(player_id) if player_id else None,
        data={
            "table": table,
            "change_type": change_type,
            "record": record,
            "old_record": old_record,
        },
    )


class ChannelManager:
    """Opens and closes the Realtime channel of each followed room."""

    def __init__(self, client: Client) -> None:
        self._client = client
        self._channels: dict[str, Any] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None or not self._loop.is_running():
                loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=loop.run_forever, daemon=True, name="realtime-loop"
                )
                self._thread.start()
                self._loop = loop
            return self._loop

    def _run(self, coro) -> Any:
        """Run a coroutine on the loop thread and wait for its result.

        On timeout the coroutine is cancelled, which lets it clean up.
        """
        future = asyncio.run_coroutine_threadsafe(coro, self._get_loop())
        try:
            return future.result(timeout=_SUBSCRIBE_TIMEOUT)
        except Exception:
            future.cancel()
            raise

    def subscribe(self, room_code: str, room_id: str, on_event: EventCallback) -> None:
        """Follow row changes for one room.

        Raises whatever the Realtime client raised (or TimeoutError). In
        that case no channel is left open.
        """
        if room_code in self._channels:
            logger.warning("Already subscribed to room %s", room_code)
            return
        self._channels[room_code] = self._run(
            self._open_channel(room_code, room_id, on_event)
        )
        logger.info("Subscribed to room %s", room_code)

    async def _open_channel(
        self, room_code: str, room_id: str, on_event: EventCallback
    ) -> Any:
        channel = self._client.realtime.channel(f"room:{room_code}")
        for table in _CLASSIFIERS:
            channel.on_postgres_changes(
                event="*",
                schema="public",
                table=table,
                filter=_row_filter(table, room_code, room_id),
                callback=lambda raw, t=table: self._dispatch(raw, t, room_code, on_event),
            )

        try:
            await channel.subscribe(
                callback=lambda state, err: self._log_state(room_code, state, err)
            )
        except (Exception, asyncio.CancelledError):
            logger.warning("Subscribe failed for room %s, closing channel", room_code)
            await self._close_channel(channel)
            raise
        return channel

    def _dispatch(
        self, raw: dict[str, Any], table: str, room_code: str, on_event: EventCallback
    ) -> None:
        try:
            payload = to_payload(raw, table, room_code)
            if payload is not None:
                on_event(payload)
        except Exception:
            logger.exception("Error handling %s change for room %s", table, room_code)

    def _log_state(self, room_code: str, state: Any, error: Exception | None) -> None:
        if error:
            logger.error("Channel error for room %s: %s", room_code, error)
        else:
            logger.debug("Channel for room %s: %s", room_code, state)

    async def _close_channel(self, channel: Any) -> None:
        try:
            await channel.unsubscribe()
            await self._client.realtime.remove_channel(channel)
        except Exception:
            logger.exception("Error removing channel")

    def unsubscribe(self, room_code: str) -> None:
        """Stop following a room. Unknown rooms are ignored."""
        channel = self._channels.pop(room_code, None)
        if channel is None:
            return
        try:
            self._run(self._close_channel(channel))
        except Exception:
            logger.exception("Error unsubscribing from room %s", room_code)
        logger.info("Unsubscribed from room %s", room_code)

    def shutdown(self) -> None:
        """Close every channel and stop the loop thread."""
        for room_code in list(self._channels):
            self.unsubscribe(room_code)
        if self._loop is not None and self._loop.is_running():
            self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._loop = None
        self._thread = None
