"""Room lobby - room code, roster, host controls."""

from __future__ import annotations

import logging

import streamlit as st

from footy_arena.database.models import RoomPlayer, RoomStatus
from footy_arena.config.settings import get_settings
from footy_arena.rooms import get_game_type
from footy_arena.rooms.errors import FootyArenaError, InvalidGameType
from footy_arena.rooms.state import LobbyState
from footy_arena.ui.components import render_roster
from footy_arena.ui.state import current_session, get_controller, get_room_sync, go

logger = logging.getLogger(__name__)


def _run(action, success: str | None = None) -> None:
    """Run a controller action, surfacing domain errors as a toast."""
    try:
        action()
    except FootyArenaError as e:
        st.toast(str(e), icon="⚠️")
        return
    if success:
        st.toast(success)
    get_room_sync().refresh()


def render_lobby_page() -> None:
    ss = st.session_state
    session = current_session()
    room_code = ss.get("room_code")
    if session is None or not room_code:
        go("dashboard")
        return

    sync = get_room_sync()
    if sync.active_room_code != room_code:
        try:
            with st.spinner("Loading room..."):
                sync.open(room_code, session.user_id)
        except FootyArenaError as e:
            st.error(str(e))
            go("dashboard", room_code=None)
            return

    header, leave = st.columns([4, 1])
    header.title("Room Lobby")
    if leave.button("Leave"):
        state = sync.state
        if state is not None:
            _run(lambda: get_controller().leave_room(state.room, session))
        sync.close()
        go("dashboard", room_code=None)

    _lobby_live()


@st.fragment(run_every=2)
def _lobby_live() -> None:
    """Re-render from the latest synced state."""
    sync = get_room_sync()
    state = sync.sync_pending()
    for notice in sync.pop_notices():
        st.toast(notice)
    if state is None:
        return

    if not state.is_member and state.room.status == RoomStatus.WAITING:
        st.warning("You are no longer in this room.")
        return

    st.markdown(f"### Room Code: `{state.room.room_code}`")
    st.caption("Share this code with friends to join.")
    if sync.is_polling:
        st.caption("Live updates unavailable, refreshing every few seconds.")

    try:
        info = get_game_type(state.room.game_type)
        st.markdown(f"{info.icon} **{info.name}**")
    except InvalidGameType:
        logger.warning("Room %s has unknown game type %s", state.room.room_code, state.room.game_type)

    if state.room.status != RoomStatus.WAITING:
        st.success("Game on! The host has started the match.")
        return

    players_col, settings_col = st.columns(2)
    with players_col:
        render_roster(state, on_transfer=_transfer, on_kick=_kick)
    with settings_col:
        _render_settings(state)


def _render_settings(state: LobbyState) -> None:
    settings = state.room.settings
    st.markdown("**Settings**")
    st.markdown(
        f"- Max Players: {settings.capacity(get_settings().default_max_players)}\n"
        f"- Rounds: {settings.rounds}\n"
        f"- Time/Question: {settings.time_per_question}s"
    )

    if not state.is_host:
        host = state.host_player
        host_name = host.display_name if host else "the host"
        st.info(f"Waiting for {host_name} to start the game...")
        return

    st.divider()
    if st.button(
        "▶ Start Game",
        type="primary",
        disabled=not state.can_start,
        use_container_width=True,
    ):
        _run(lambda: get_controller().start_game(state.room))
    if not state.can_start:
        st.caption("Need at least 2 players to start.")

    label = "🔓 Unlock Room" if state.room.is_locked else "🔒 Lock Room"
    if st.button(label, use_container_width=True):
        _run(lambda: get_controller().toggle_lock(state.room))


def _transfer(player: RoomPlayer) -> None:
    state = get_room_sync().state
    if state is not None:
        _run(
            lambda: get_controller().transfer_host(state.room, str(player.player_id)),
            "Host transferred",
        )


def _kick(player: RoomPlayer) -> None:
    state = get_room_sync().state
    if state is not None:
        _run(
            lambda: get_controller().kick_player(state.room, str(player.player_id)),
            "Player kicked",
        )
