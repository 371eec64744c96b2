"""
Monthly trend engine: month -> region -> count aggregates rendered as a
single-series bar chart for the selected region.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from estate_trends.config import REGION_TOTAL
from estate_trends.data.aggregates import monthly_series, parse_aggregate, region_vocabulary
from estate_trends.data.source import ArtifactSource, stats_path
from estate_trends.exceptions import FetchError, TrendUnavailable
from estate_trends.state.fence import RequestFence
from estate_trends.ui.components.charts import ChartConfig, ChartSeries, ChartSlot

logger = logging.getLogger(__name__)


def chart_label(region: str, category: str) -> str:
    if region == REGION_TOTAL:
        return f"Total Transactions (Seoul Total, {category})"
    return f"Transactions ({region}, {category})"


class MonthlyTrendEngine:
    def __init__(self, source: ArtifactSource, slot: ChartSlot) -> None:
        self._source = source
        self.slot = slot
        self._fence = RequestFence("monthly_trend")
        self.category: Optional[str] = None
        self.aggregate: Optional[Dict[str, Dict[str, int]]] = None
        self.selected_region = REGION_TOTAL
        self.region_options: List[str] = [REGION_TOTAL]
        self._vocabulary_ready = False

    @property
    def cached(self) -> bool:
        return self.aggregate is not None

    def invalidate(self) -> None:
        """Drop the cached aggregate, the region vocabulary and the chart (category change)."""
        self._fence.invalidate()
        self.category = None
        self.aggregate = None
        self.selected_region = REGION_TOTAL
        self.region_options = [REGION_TOTAL]
        self._vocabulary_ready = False
        self.slot.clear()

    def load(self, category: str, region: Optional[str] = None) -> bool:
        """Fetch the aggregate for ``category`` and draw it; missing data is not an error."""
        token = self._fence.issue()
        try:
            aggregate = parse_aggregate(self._source.fetch_json(stats_path(category)))
        except (FetchError, TrendUnavailable) as exc:
            if self._fence.is_current(token):
                logger.info("No monthly stats for %s: %s", category, exc)
            return False
        if not self._fence.is_current(token):
            return False

        if self.category is not None and self.category != category:
            self.invalidate()
        self.category = category
        self.aggregate = aggregate
        self._populate_regions(aggregate)
        self.render(region if region is not None else self.selected_region)
        return True

    def _populate_regions(self, aggregate: Dict[str, Dict[str, int]]) -> None:
        if self._vocabulary_ready or not aggregate:
            return
        for region in region_vocabulary(aggregate):
            if region not in self.region_options:
                self.region_options.append(region)
        self._vocabulary_ready = True

    def render(self, region: str) -> Optional[ChartConfig]:
        if self.aggregate is None or self.category is None:
            return None
        self.selected_region = region
        months, counts = monthly_series(self.aggregate, region)
        if not months:
            self.slot.clear()
            return None
        config = ChartConfig(
            kind="bar",
            labels=tuple(months),
            series=(ChartSeries(label=chart_label(region, self.category), data=tuple(counts)),),
            title=chart_label(region, self.category),
            yaxis_title="Transactions",
        )
        self.slot.replace(config)
        return config

    def on_region_changed(self, region: str) -> Optional[ChartConfig]:
        """Re-render from the cached aggregate; the aggregate does not depend on the region."""
        self.selected_region = region
        if not self.cached:
            return None
        return self.render(region)
