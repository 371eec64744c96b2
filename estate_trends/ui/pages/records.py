from __future__ import annotations

import streamlit as st

from estate_trends.state.sync import PRIMARY
from estate_trends.ui.components.kpi import render_kpi_cards, summary_cards
from estate_trends.ui.components.tables import render_table
from estate_trends.ui.layout import category_selector
from estate_trends.ui.pages.context import PageContext


def _file_controls(context: PageContext) -> None:
    controller = context.controller
    selector = controller.file_selector()
    options = list(selector.options)
    selected = controller.state.selected_file
    key = f"et_file_{controller.category}"

    def _on_change() -> None:
        controller.select_file(st.session_state[key])

    col_cat, col_file, col_load = st.columns([1, 2, 1], vertical_alignment="bottom")
    with col_cat:
        category_selector(controller, PRIMARY)
    with col_file:
        st.session_state[key] = selected if selected in options else options[0]
        st.selectbox(
            "File",
            options=options,
            disabled=selector.disabled,
            key=key,
            on_change=_on_change,
        )
    with col_load:
        st.button(
            "Load",
            key="et_load",
            disabled=not selector.load_enabled,
            on_click=controller.load_records,
            use_container_width=True,
        )


def render(context: PageContext) -> None:
    st.subheader("Transaction Records")
    _file_controls(context)

    viewer = context.controller.viewer
    if viewer.status:
        if viewer.failed:
            st.error(viewer.status)
        else:
            st.caption(viewer.status)

    if viewer.summary is not None:
        render_kpi_cards(summary_cards(viewer.summary, viewer.monetary_field), columns=2)

    render_table(
        viewer.table,
        raw_df=viewer.records,
        export_file_name=viewer.filename or "records.csv",
    )
