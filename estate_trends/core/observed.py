from __future__ import annotations

import logging
from typing import Optional

from estate_trends.data.observations import observed_series, parse_observation_log, series_color
from estate_trends.data.source import ArtifactSource, observation_log_path
from estate_trends.exceptions import FetchError, TrendUnavailable
from estate_trends.state.fence import RequestFence
from estate_trends.ui.components.charts import ChartConfig, ChartSeries, ChartSlot

logger = logging.getLogger(__name__)


class ObservationTrendEngine:
    """Draw how each target month's count evolved across successive observations."""

    def __init__(self, source: ArtifactSource, slot: ChartSlot) -> None:
        self._source = source
        self.slot = slot
        self._fence = RequestFence("observed_trend")
        self.category: Optional[str] = None

    def invalidate(self) -> None:
        self._fence.invalidate()
        self.category = None
        self.slot.clear()

    def load(self, category: str) -> bool:
        token = self._fence.issue()
        try:
            log = parse_observation_log(self._source.fetch_json(observation_log_path(category)))
        except (FetchError, TrendUnavailable) as exc:
            if self._fence.is_current(token):
                logger.info("No observation log for %s: %s", category, exc)
            return False
        if not self._fence.is_current(token):
            return False

        self.category = category
        if not log:
            self.slot.clear()
            return True
        labels, series = observed_series(log)
        config = ChartConfig(
            kind="line",
            labels=tuple(labels),
            series=tuple(
                ChartSeries(label=f"Month {month} Count", data=tuple(values), color=series_color(index))
                for index, (month, values) in enumerate(series)
            ),
            title=f"Observed Counts by Target Month ({category})",
            yaxis_title="Transactions",
        )
        self.slot.replace(config)
        return True
