"""
Reusable helpers for rendering data tables with consistent configuration.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st


def render_table(
    df: Optional[pd.DataFrame],
    raw_df: Optional[pd.DataFrame] = None,
    height: int = 500,
    export_file_name: str = "export.csv",
) -> None:
    if df is None or df.empty:
        return

    # Display frames mix numbers with "" for missing cells; Arrow needs one type per column
    st.dataframe(
        df.astype(str),
        use_container_width=True,
        height=height,
        hide_index=True,
    )

    export_df = raw_df if raw_df is not None else df
    csv_bytes = export_df.to_csv(index=False).encode("utf-8-sig")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
    )
