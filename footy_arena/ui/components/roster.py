"""Roster component - player list with host controls."""

from __future__ import annotations

from typing import Callable

import streamlit as st

from footy_arena.database.models import RoomPlayer
from footy_arena.rooms.state import LobbyState


def render_roster(
    state: LobbyState,
    on_transfer: Callable[[RoomPlayer], None],
    on_kick: Callable[[RoomPlayer], None],
) -> None:
    """Render members in join order; hosts get transfer/kick buttons."""
    st.markdown(f"**Players ({state.player_count})**")

    for p in state.players:
        is_player_host = p.player_id == state.room.host_id
        color = p.profile.avatar_color if p.profile else "#22c55e"
        crown = " 👑" if is_player_host else ""
        you = " (You)" if str(p.player_id) == str(state.viewer_id) else ""

        name_col, transfer_col, kick_col = st.columns([6, 1, 1])
        name_col.markdown(
            f'<span style="color:{color}">●</span> {p.display_name}{you}{crown}',
            unsafe_allow_html=True,
        )

        if state.is_host and not is_player_host:
            if transfer_col.button("👑", key=f"transfer-{p.player_id}", help="Transfer host"):
                on_transfer(p)
            if kick_col.button("✖", key=f"kick-{p.player_id}", help="Kick player"):
                on_kick(p)
