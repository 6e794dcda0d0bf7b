"""Ledgerline dashboard with responsive card layout."""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from app.layout import (
    NAV_LINKS,
    determine_active_page,
    inject_css,
    render_navbar,
    render_sidebar,
)
from app.pages import render_dashboard_page, render_entry_page, render_share_page
from config import Settings, configure_logging, get_settings
from core import LedgerError, LedgerStore, TransactionKind
from core.sharing import SHARE_PAGE, parse_share_params
from core.summary_service import prepare_dashboard_data
from data.synth import write_demo_ledger

logger = logging.getLogger(__name__)

ENTRY_PAGES: dict[str, TransactionKind] = {
    "add-expense": "expense",
    "add-earning": "earning",
}


def _open_store(settings: Settings) -> LedgerStore:
    store = LedgerStore(settings.data_dir)
    if settings.seed_demo_data and store.is_empty():
        project = write_demo_ledger(store)
        logger.info("Seeded demo project %s into %s", project.id, settings.data_dir)
    return store


def _requested_id() -> Optional[int]:
    raw = st.query_params.get("id")
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _render_share(store: LedgerStore, settings: Settings) -> None:
    target = parse_share_params(st.query_params.to_dict())
    render_share_page(store, target, settings.currency_symbol)


def _render_app(store: LedgerStore, settings: Settings) -> None:
    valid_pages = [link.slug for link in NAV_LINKS if link.enabled]
    active_page = determine_active_page(valid_pages)
    sidebar = render_sidebar(store)
    render_navbar(active_page, sidebar.project.id if sidebar.project else None)

    if sidebar.project is None:
        st.info("Create a project in the sidebar to start tracking.")
        return

    if active_page in ENTRY_PAGES:
        render_entry_page(store, sidebar.project, ENTRY_PAGES[active_page], _requested_id())
        return

    if sidebar.start is None or sidebar.end is None:
        st.info("Pick a start and end date to see totals.")
        return

    data = prepare_dashboard_data(
        store,
        sidebar.project.id,
        sidebar.start,
        sidebar.end,
        currency_symbol=settings.currency_symbol,
    )
    render_dashboard_page(
        data,
        store=store,
        currency_symbol=settings.currency_symbol,
        share_base_url=settings.share_base_url,
    )


def main() -> None:
    """Application entrypoint for the Ledgerline dashboard."""

    st.set_page_config(
        page_title="Ledgerline",
        page_icon="📒",
        layout="wide",
    )
    settings = get_settings()
    configure_logging(settings.log_level)
    inject_css()

    try:
        store = _open_store(settings)
        if st.query_params.get("page") == SHARE_PAGE:
            _render_share(store, settings)
        else:
            _render_app(store, settings)
    except LedgerError as exc:
        logger.exception("Ledgerline request failed")
        st.error(str(exc))


if __name__ == "__main__":
    main()
