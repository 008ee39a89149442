"""Dashboard - create a room or join one by code."""

from __future__ import annotations

import streamlit as st

from footy_arena.database.models import RoomSettings, Visibility
from footy_arena.rooms import GAME_TYPES
from footy_arena.rooms.errors import FootyArenaError
from footy_arena.ui.state import current_session, get_controller, get_identity, go


def render_dashboard_page() -> None:
    session = current_session()
    if session is None or not session.username:
        go("sign_in")
        return

    header, signout = st.columns([4, 1])
    header.title(f"Welcome, {session.username}")
    if signout.button("Sign Out"):
        get_identity().sign_out()
        go("landing", session=None)

    tab_create, tab_join = st.tabs(["Create Room", "Join Room"])
    with tab_create:
        _render_create_form()
    with tab_join:
        _render_join_form()


def _render_create_form() -> None:
    session = current_session()

    with st.form("create_room_form"):
        game_type = st.selectbox(
            "Game Type",
            options=[info.id for info in GAME_TYPES],
            format_func=lambda gid: next(
                f"{i.icon} {i.name}" for i in GAME_TYPES if i.id == gid
            ),
        )
        col1, col2, col3 = st.columns(3)
        max_players = col1.number_input("Max Players", min_value=2, max_value=50, value=20)
        rounds = col2.number_input("Rounds", min_value=1, max_value=30, value=5)
        time_per_question = col3.number_input(
            "Time/Question (s)", min_value=5, max_value=120, value=15
        )
        visibility = st.radio(
            "Visibility",
            options=[Visibility.PRIVATE, Visibility.PUBLIC],
            format_func=lambda v: v.value.title(),
            horizontal=True,
        )
        submitted = st.form_submit_button("Create Room", type="primary")

    if submitted:
        settings = RoomSettings(
            max_players=int(max_players),
            rounds=int(rounds),
            time_per_question=int(time_per_question),
        )
        try:
            with st.spinner("Creating room..."):
                room = get_controller().create_room(session, game_type, settings, visibility)
        except FootyArenaError as e:
            st.error(str(e))
            return
        go("lobby", room_code=room.room_code)


def _render_join_form() -> None:
    session = current_session()

    with st.form("join_room_form"):
        code = st.text_input("Room Code", max_chars=6, placeholder="e.g. AB3XQZ")
        submitted = st.form_submit_button("Join Room", type="primary")

    if submitted:
        if not code or not code.strip():
            st.error("Please enter a room code.")
            return
        try:
            with st.spinner("Joining room..."):
                room = get_controller().join_room(session, code)
        except FootyArenaError as e:
            st.error(str(e))
            return
        st.toast("Joined room successfully!")
        go("lobby", room_code=room.room_code)
