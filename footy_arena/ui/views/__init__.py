"""Page renderers for Footy Arena."""

from footy_arena.ui.views.dashboard import render_dashboard_page
from footy_arena.ui.views.landing import render_landing_page
from footy_arena.ui.views.lobby import render_lobby_page
from footy_arena.ui.views.sign_in import render_sign_in_page

__all__ = [
    "render_dashboard_page",
    "render_landing_page",
    "render_lobby_page",
    "render_sign_in_page",
]
