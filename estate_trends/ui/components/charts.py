"""
Chart configs, the owned chart slot, and the Plotly backend with consistent
styling for the dashboard.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Tuple

import plotly.graph_objects as go
import streamlit as st

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "plotly_white"
BAR_FILL = "rgba(54, 162, 235, 0.6)"
BAR_BORDER = "rgba(54, 162, 235, 1)"
CHART_KINDS = ("bar", "line")


@dataclass(frozen=True)
class ChartSeries:
    label: str
    data: Tuple[Optional[float], ...]
    color: Optional[str] = None


@dataclass(frozen=True)
class ChartConfig:
    kind: str
    labels: Tuple[str, ...]
    series: Tuple[ChartSeries, ...] = field(default_factory=tuple)
    title: Optional[str] = None
    yaxis_title: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in CHART_KINDS:
            raise ValueError(f"Unsupported chart kind {self.kind!r}")


class ChartHandle(Protocol):
    def destroy(self) -> None: ...


class ChartBackend(Protocol):
    def construct(self, config: ChartConfig) -> ChartHandle: ...


class ChartSlot:
    """At most one live chart per slot; replacing always releases the old handle first."""

    def __init__(self, name: str, backend: ChartBackend) -> None:
        self.name = name
        self._backend = backend
        self.handle: Optional[ChartHandle] = None
        self.config: Optional[ChartConfig] = None

    def clear(self) -> None:
        if self.handle is not None:
            self.handle.destroy()
        self.handle = None
        self.config = None

    def replace(self, config: ChartConfig) -> ChartHandle:
        self.clear()
        self.handle = self._backend.construct(config)
        self.config = config
        logger.debug("%s: drew %s chart with %d series", self.name, config.kind, len(config.series))
        return self.handle


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    legend_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        title=title,
        legend_title=legend_title,
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    # Month keys and observation stamps are labels, keep them in the given order
    fig.update_xaxes(showgrid=False, type="category")
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def _bar_figure(labels: Sequence[str], series: Sequence[ChartSeries]) -> go.Figure:
    fig = go.Figure()
    for item in series:
        fig.add_trace(
            go.Bar(
                x=list(labels),
                y=list(item.data),
                name=item.label,
                marker=dict(color=item.color or BAR_FILL, line=dict(color=BAR_BORDER, width=1)),
            )
        )
    fig.update_layout(showlegend=True)
    fig.update_yaxes(rangemode="tozero")
    return fig


def _line_figure(labels: Sequence[str], series: Sequence[ChartSeries]) -> go.Figure:
    fig = go.Figure()
    for item in series:
        fig.add_trace(
            go.Scatter(
                x=list(labels),
                y=list(item.data),
                name=item.label,
                mode="lines+markers",
                line=dict(color=item.color, shape="spline", smoothing=0.1),
                connectgaps=False,
            )
        )
    return fig


class PlotlyChartHandle:
    def __init__(self, figure: go.Figure) -> None:
        self.figure: Optional[go.Figure] = figure

    @property
    def destroyed(self) -> bool:
        return self.figure is None

    def destroy(self) -> None:
        self.figure = None


class PlotlyChartBackend:
    def construct(self, config: ChartConfig) -> PlotlyChartHandle:
        if config.kind == "bar":
            fig = _bar_figure(config.labels, config.series)
        else:
            fig = _line_figure(config.labels, config.series)
        return PlotlyChartHandle(_configure_layout(fig, config.title, config.yaxis_title))


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def render_slot(slot: ChartSlot, empty_message: str) -> None:
    figure = getattr(slot.handle, "figure", None)
    if figure is None:
        st.info(empty_message)
        return
    render_plotly(figure)
