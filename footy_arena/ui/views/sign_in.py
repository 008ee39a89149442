"""Sign-in page - claim a username."""

from __future__ import annotations

import streamlit as st

from footy_arena.rooms.errors import FootyArenaError
from footy_arena.ui.state import current_session, get_identity, go


def render_sign_in_page() -> None:
    session = current_session()
    if session is not None and session.username:
        go("dashboard")
        return

    st.title("Sign In")
    st.caption("Pick a username to join the arena")

    with st.form("sign_in_form"):
        username = st.text_input(
            "Username",
            max_chars=16,
            placeholder="Enter username...",
            help="3-16 characters: letters, numbers, underscore",
        )
        submitted = st.form_submit_button("Enter Arena", type="primary")

    if submitted:
        try:
            with st.spinner("Signing in..."):
                session = get_identity().sign_in(username)
        except FootyArenaError as e:
            st.error(str(e))
            return
        go("dashboard", session=session)
