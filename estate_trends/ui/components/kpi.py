from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import streamlit as st

from estate_trends.data.records import RecordSummary
from estate_trends.ui.components.formatting import format_amount, format_number


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    value_display: Optional[str] = None
    decimals: int = 0
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    return format_number(card.value, decimals=card.decimals)


def summary_cards(summary: RecordSummary, monetary_field: str) -> List[KpiCard]:
    """Total record count, plus the average amount when at least one row qualifies."""
    cards = [KpiCard(label="Total Records", value=summary.total_records)]
    if summary.average_amount is not None:
        cards.append(
            KpiCard(
                label="Average Deal Amount",
                value=summary.average_amount,
                value_display=format_amount(summary.average_amount),
                help_text=f"Mean of {monetary_field} over {summary.amount_count:,} records with a numeric value.",
            )
        )
    return cards


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 3) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=_format_value(card))
                if card.help_text:
                    st.caption(card.help_text)
