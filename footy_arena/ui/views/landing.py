"""Landing page - title and how it works."""

from __future__ import annotations

import streamlit as st

from footy_arena.rooms import GAME_TYPES
from footy_arena.ui.state import current_session, go


def render_landing_page() -> None:
    st.title("⚽ Footy Arena")
    st.caption("The ultimate football knowledge party game. Challenge your mates in real-time!")

    session = current_session()
    signed_in = session is not None and session.username is not None

    col_a, col_b = st.columns(2)
    with col_a:
        if st.button(
            "Go to Dashboard" if signed_in else "Sign In",
            type="primary",
            use_container_width=True,
        ):
            go("dashboard" if signed_in else "sign_in")

    with col_b, st.popover("How It Works", use_container_width=True):
        st.markdown(
            """
1. **Pick a username** - no email, no password.
2. **Create a room** and share the 6-character code, or **join** a mate's room.
3. **Play** - scores update live for everyone in the room.
"""
        )

    st.divider()
    st.subheader("Game Modes")
    for info in GAME_TYPES:
        badge = " · Party mode" if info.party_mode else ""
        st.markdown(f"{info.icon} **{info.name}**{badge}  \n{info.description}")
