"""
Footy Arena Real-time Sync.

Change-feed subscriptions and lobby state reconciliation.
"""

from footy_arena.realtime.events import EventPayload, RoomEvent
from footy_arena.realtime.subscriptions import ChannelManager
from footy_arena.realtime.sync_manager import RoomSync

__all__ = [
    "ChannelManager",
    "EventPayload",
    "RoomEvent",
    "RoomSync",
]
