"""Session-state helpers shared by the Streamlit pages."""

from __future__ import annotations

import streamlit as st

from footy_arena.auth import IdentityService, SessionContext
from footy_arena.database.client import get_supabase_client
from footy_arena.realtime import RoomSync
from footy_arena.rooms import RoomController


def get_controller() -> RoomController:
    return RoomController(get_supabase_client())


def get_identity() -> IdentityService:
    return IdentityService(get_supabase_client())


def current_session() -> SessionContext | None:
    return st.session_state.get("session")


def get_room_sync() -> RoomSync:
    """Per-browser-session RoomSync; never shared between sessions."""
    ss = st.session_state
    if "room_sync" not in ss:
        ss["room_sync"] = RoomSync(get_supabase_client(), get_controller())
    return ss["room_sync"]


def go(page: str, **values) -> None:
    """Navigate to a page, storing extra values in session state."""
    st.session_state.update(values)
    st.session_state["page"] = page
    st.rerun()
