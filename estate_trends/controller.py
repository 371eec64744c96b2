"""
Dashboard controller: owns every component for one browser session and keeps
the active selection consistent across them.
"""

from __future__ import annotations

import logging
from typing import Optional

from estate_trends.config import REGION_TOTAL, TABS, Settings
from estate_trends.core.monthly import MonthlyTrendEngine
from estate_trends.core.observed import ObservationTrendEngine
from estate_trends.core.records import RecordViewer
from estate_trends.data.manifest import FileSelector, ManifestRegistry
from estate_trends.data.source import ArtifactSource, open_source
from estate_trends.exceptions import ManifestUnavailable
from estate_trends.state.selection import SelectionBus, SelectionChanged, SelectionState
from estate_trends.state.sync import CategorySync
from estate_trends.state.tabs import TabController
from estate_trends.ui.components.charts import ChartBackend, ChartSlot, PlotlyChartBackend

logger = logging.getLogger(__name__)


class DashboardController:
    def __init__(
        self,
        source: ArtifactSource,
        settings: Optional[Settings] = None,
        chart_backend: Optional[ChartBackend] = None,
    ) -> None:
        self.settings = settings or Settings()
        backend = chart_backend or PlotlyChartBackend()
        self.bus = SelectionBus()
        self.state = SelectionState()
        self.status = ""
        self.registry = ManifestRegistry(source)
        self.sync = CategorySync(self.bus, initial=self.state.category)
        self.viewer = RecordViewer(source, self.settings.monetary_field)
        self.monthly = MonthlyTrendEngine(source, ChartSlot("monthlyChart", backend))
        self.observed = ObservationTrendEngine(source, ChartSlot("observedChart", backend))
        self.tabs = TabController(
            TABS,
            loaders={
                "monthly_trend": self._load_monthly,
                "observed_trend": self.observed.load,
            },
        )
        self.bus.subscribe(self._on_selection_changed)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DashboardController":
        return cls(open_source(settings.data_root, settings.fetch_timeout), settings=settings)

    # -- lifecycle -------------------------------------------------------

    def bootstrap(self) -> bool:
        """Load the manifest; on failure the file selector stays disabled."""
        try:
            self.registry.load()
        except ManifestUnavailable as exc:
            self.status = f"Error loading manifest: {exc}"
            self.state = self.state.with_changes(selected_file=None)
            return False
        self.status = ""
        self.state = self.state.with_changes(selected_file=self.file_selector().default)
        return True

    def refresh(self) -> bool:
        """Reload the manifest and drop every derived view."""
        self.viewer.clear()
        self.monthly.invalidate()
        self.observed.invalidate()
        self.state = self.state.with_changes(selected_region=REGION_TOTAL)
        loaded = self.bootstrap()
        if self.state.active_tab != "records":
            self.tabs.activate(self.state.active_tab, self.state.category)
        return loaded

    # -- selectors -------------------------------------------------------

    @property
    def category(self) -> str:
        return self.state.category

    def file_selector(self) -> FileSelector:
        return self.registry.file_selector(self.state.category)

    def set_primary_category(self, value: str) -> bool:
        return self.sync.on_primary_changed(value)

    def set_secondary_category(self, value: str) -> bool:
        return self.sync.on_secondary_changed(value)

    def select_file(self, filename: Optional[str]) -> None:
        if filename not in self.registry.files_for(self.state.category):
            filename = None
        self.state = self.state.with_changes(selected_file=filename)

    def select_region(self, region: str) -> None:
        if region not in self.monthly.region_options:
            raise ValueError(f"Unknown region {region!r}")
        self.state = self.state.with_changes(selected_region=region)
        self.monthly.on_region_changed(region)

    def _on_selection_changed(self, event: SelectionChanged) -> None:
        if event.field != "category":
            return
        category = event.current
        logger.info("Category changed %s -> %s (%s selector)", event.previous, category, event.source)
        self.state = self.state.with_changes(category=category, selected_region=REGION_TOTAL)
        self.state = self.state.with_changes(selected_file=self.file_selector().default)
        self.monthly.invalidate()
        self.observed.invalidate()
        self._load_monthly(category)
        self.observed.load(category)

    # -- actions ---------------------------------------------------------

    def load_records(self) -> bool:
        selector = self.file_selector()
        filename = self.state.selected_file
        if not selector.load_enabled or not filename:
            return False
        return self.viewer.load(self.state.category, filename)

    def activate_tab(self, panel: str) -> None:
        self.tabs.activate(panel, self.state.category)
        self.state = self.state.with_changes(active_tab=panel)

    def _load_monthly(self, category: str) -> bool:
        return self.monthly.load(category, self.state.selected_region)
