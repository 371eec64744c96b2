from __future__ import annotations

import streamlit as st

from estate_trends.state.sync import SECONDARY
from estate_trends.ui.components.charts import render_slot
from estate_trends.ui.layout import category_selector
from estate_trends.ui.pages.context import PageContext


def render(context: PageContext) -> None:
    controller = context.controller
    st.subheader("Monthly Transaction Trend")

    options = controller.monthly.region_options
    selected = controller.state.selected_region
    key = f"et_region_{controller.category}"

    def _on_region_change() -> None:
        controller.select_region(st.session_state[key])

    col_cat, col_region = st.columns(2)
    with col_cat:
        category_selector(controller, SECONDARY)
    with col_region:
        st.session_state[key] = selected if selected in options else options[0]
        st.selectbox(
            "Region",
            options=options,
            key=key,
            on_change=_on_region_change,
        )

    render_slot(controller.monthly.slot, "No monthly statistics available for this category yet.")
