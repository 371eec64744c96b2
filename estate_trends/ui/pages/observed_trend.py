from __future__ import annotations

import streamlit as st

from estate_trends.state.sync import SECONDARY
from estate_trends.ui.components.charts import render_slot
from estate_trends.ui.layout import category_selector
from estate_trends.ui.pages.context import PageContext


def render(context: PageContext) -> None:
    st.subheader("Observed Trend")
    st.caption(
        "Each line follows one target month across successive observations; "
        "gaps mark observations where that month was not reported."
    )
    category_selector(context.controller, SECONDARY)
    render_slot(context.controller.observed.slot, "No observation log available for this category yet.")
