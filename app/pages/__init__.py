"""Page modules for the Ledgerline Streamlit application."""

from .dashboard import render_page as render_dashboard_page
from .entry import render_page as render_entry_page
from .share import render_page as render_share_page

__all__ = [
    "render_dashboard_page",
    "render_entry_page",
    "render_share_page",
]
