"""Shared layout primitives for the Ledgerline Streamlit app."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

import streamlit as st

from core import LedgerError, LedgerStore, Project
from core.summary_service import default_date_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("dashboard", "Dashboard", True),
    NavigationLink("add-expense", "New expense", True),
    NavigationLink("add-earning", "New earning", True),
)

DEFAULT_PAGE = "dashboard"

_ACCENT = "#2563EB"
_MUTED = "#64748B"
_BORDER = "#E2E8F0"


@dataclass(frozen=True)
class SidebarState:
    project: Optional[Project]
    start: Optional[date]
    end: Optional[date]


def inject_css() -> None:
    """Inject global CSS tokens and component styling into the Streamlit app."""

    st.markdown(
        f"""
        <style>
          .block-container {{ max-width: 1280px; padding-top: 2rem; }}

          .ll-nav {{
            display: flex;
            justify-content: space-between;
            align-items: baseline;
            border-bottom: 1px solid {_BORDER};
            margin-bottom: 1.25rem;
            padding-bottom: 0.6rem;
          }}
          .ll-nav__brand {{ font-size: 1.4rem; font-weight: 800; color: {_ACCENT}; }}
          .ll-nav__links {{ display: flex; gap: 1.5rem; }}
          .ll-nav__link, .ll-nav__link:visited {{ color: {_MUTED}; font-weight: 600; text-decoration: none; }}
          .ll-nav__link.is-active {{ color: {_ACCENT}; text-decoration: underline; text-underline-offset: 6px; }}

          .ll-card-anchor {{ display: none; }}
          [data-testid="stVerticalBlock"]:has(> .ll-card-anchor) {{
            border: 1px solid {_BORDER};
            border-radius: 10px;
            padding: 14px 16px;
            margin-bottom: 14px;
            background: #FFFFFF;
          }}
          .ll-card__head {{ display: flex; justify-content: space-between; font-weight: 700; }}
          .ll-chip {{ font-size: 11px; color: {_MUTED}; border: 1px solid {_BORDER}; border-radius: 6px; padding: 1px 6px; }}
          .ll-item__meta {{ color: {_MUTED}; font-size: 0.82rem; }}
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable Ledgerline card."""

    chip_html = f'<span class="ll-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="ll-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="ll-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def _first_param(name: str) -> Optional[str]:
    value = st.query_params.get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    return value


def render_navbar(active_page: str, project_id: str | None) -> None:
    """Render the navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "ll-nav__link"
        aria_current = ""
        if link.slug == active_page:
            css_class += " is-active"
            aria_current = ' aria-current="page"'

        if link.enabled:
            href = f"?page={link.slug}"
            if project_id:
                href += f"&project={project_id}"
            link_markup.append(
                f'<a class="{css_class}" href="{href}"{aria_current} target="_self">{link.label}</a>'
            )
        else:
            link_markup.append(f'<span class="{css_class}">{link.label}</span>')

    st.markdown(
        f"""
        <nav class="ll-nav">
            <div class="ll-nav__brand">Ledgerline</div>
            <div class="ll-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the query params or session state."""

    default_page = st.session_state.get("active_page", DEFAULT_PAGE)
    raw_page = _first_param("page") or default_page
    page = raw_page if raw_page in set(valid_pages) else DEFAULT_PAGE

    if st.session_state.get("active_page") != page:
        st.session_state["active_page"] = page
    if _first_param("page") != page:
        st.query_params["page"] = page
    return page


def _render_project_selector(projects: Sequence[Project]) -> Optional[Project]:
    if not projects:
        st.sidebar.info("No projects yet. Add one to get started.")
        return None

    by_id = {project.id: project for project in projects}
    ids = list(by_id)
    requested = _first_param("project") or st.session_state.get("project_id")
    index = ids.index(requested) if requested in by_id else 0

    chosen_id = st.sidebar.selectbox(
        "Project",
        ids,
        index=index,
        format_func=lambda project_id: by_id[project_id].name,
        key="project_selector",
    )
    return by_id[chosen_id]


def _render_add_project(store: LedgerStore) -> Optional[Project]:
    with st.sidebar.form("add-project", clear_on_submit=True):
        name = st.text_input("New project", placeholder="Project name")
        submitted = st.form_submit_button("Add project")
    if not submitted:
        return None
    try:
        project = store.add_project(name)
    except LedgerError as exc:
        logger.warning("Could not add project: %s", exc)
        st.sidebar.error(str(exc))
        return None
    st.sidebar.success(f"{project.name} was added.")
    return project


def _render_date_range() -> tuple[Optional[date], Optional[date]]:
    default_start, default_end = default_date_range()
    selection = st.sidebar.date_input(
        "Date range",
        value=(default_start, default_end),
        key="date_range",
    )
    if isinstance(selection, (list, tuple)):
        if len(selection) == 2:
            return selection[0], selection[1]
        return (selection[0], None) if selection else (None, None)
    return selection, selection


def render_sidebar(store: LedgerStore) -> SidebarState:
    """Render project and date-range filters and return the current selection."""

    st.sidebar.markdown("### Project")
    added = _render_add_project(store)
    if added is not None:
        st.session_state["project_id"] = added.id
        st.session_state["project_selector"] = added.id

    try:
        projects = store.list_projects()
    except LedgerError as exc:
        logger.error("Failed to load projects: %s", exc)
        st.sidebar.error("Failed to load projects. Please try again.")
        projects = []

    project = _render_project_selector(projects)
    if project is not None:
        st.session_state["project_id"] = project.id
        if _first_param("project") != project.id:
            st.query_params["project"] = project.id

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Filters")
    start, end = _render_date_range()
    return SidebarState(project=project, start=start, end=end)


__all__ = [
    "DEFAULT_PAGE",
    "NAV_LINKS",
    "NavigationLink",
    "SidebarState",
    "card",
    "determine_active_page",
    "inject_css",
    "render_navbar",
    "render_sidebar",
]
