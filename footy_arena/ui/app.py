"""Footy Arena - Streamlit Application Entrypoint."""

from __future__ import annotations

import streamlit as st

from footy_arena.config import configure_logging, get_settings


def _restore_session() -> None:
    """Pick up an existing Supabase session on first load."""
    if "session" in st.session_state:
        return
    from footy_arena.ui.state import get_identity

    st.session_state["session"] = get_identity().restore_session()


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="Footy Arena",
        page_icon="⚽",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    configure_logging(get_settings())
    _restore_session()

    if "page" not in st.session_state:
        st.session_state["page"] = "landing"

    # Page routing (lazy imports to avoid circular deps)
    page = st.session_state["page"]

    if page == "landing":
        from footy_arena.ui.views import render_landing_page
        render_landing_page()
    elif page == "sign_in":
        from footy_arena.ui.views import render_sign_in_page
        render_sign_in_page()
    elif page == "dashboard":
        from footy_arena.ui.views import render_dashboard_page
        render_dashboard_page()
    elif page == "lobby":
        from footy_arena.ui.views import render_lobby_page
        render_lobby_page()
    else:
        st.session_state["page"] = "landing"
        st.rerun()


if __name__ == "__main__":
    main()
