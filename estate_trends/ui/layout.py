"""
Layout helpers for the Streamlit application (page setup, tab bar, shared selectors).
"""

from __future__ import annotations

import streamlit as st

from estate_trends.config import CATEGORIES
from estate_trends.controller import DashboardController
from estate_trends.state.sync import PRIMARY

CATEGORY_LABELS = {
    "trade": "Trade (매매)",
    "rent": "Rent (전월세)",
}


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Real Estate Transaction Trends",
        layout="wide",
        page_icon=":bar_chart:",
    )


def tab_bar(controller: DashboardController) -> str:
    """Render the panel switcher and return the active panel key."""
    panels = controller.tabs.panels

    def _on_change() -> None:
        controller.activate_tab(st.session_state["et_active_tab"])

    st.session_state["et_active_tab"] = controller.tabs.active
    st.radio(
        "View",
        options=panels,
        format_func=controller.tabs.label,
        horizontal=True,
        key="et_active_tab",
        on_change=_on_change,
        label_visibility="collapsed",
    )
    return controller.tabs.active


def category_selector(controller: DashboardController, endpoint: str) -> None:
    """One projection of the shared category; the controller holds the value."""
    key = f"et_category_{endpoint}"
    current = controller.sync.primary if endpoint == PRIMARY else controller.sync.secondary

    def _on_change() -> None:
        value = st.session_state[key]
        if endpoint == PRIMARY:
            controller.set_primary_category(value)
        else:
            controller.set_secondary_category(value)

    st.session_state[key] = current
    st.selectbox(
        "Category",
        options=list(CATEGORIES),
        format_func=lambda v: CATEGORY_LABELS.get(v, v),
        key=key,
        on_change=_on_change,
    )


def sidebar_controls(controller: DashboardController) -> None:
    st.sidebar.header("Data")
    if st.sidebar.button("🔄 Refresh Data", key="et_refresh"):
        controller.refresh()
        st.toast("Manifest reloaded", icon="🔄")
    st.sidebar.caption(f"Source: {controller.settings.data_root}")
    if not controller.registry.loaded:
        st.sidebar.caption("Manifest not loaded")
        return
    manifest = controller.registry.manifest
    for category in CATEGORIES:
        st.sidebar.caption(f"{CATEGORY_LABELS[category]}: {len(manifest.get(category, ())):,} files")
