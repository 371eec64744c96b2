from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from estate_trends.config import TabConfig

logger = logging.getLogger(__name__)

PanelLoader = Callable[[str], Any]


class TabController:
    """Exclusive display over the dashboard panels.

    Activating a panel hides every other one. Panels with a loader are
    (re)loaded for the current category on every activation.
    """

    def __init__(
        self,
        tabs: Sequence[TabConfig],
        loaders: Optional[Mapping[str, PanelLoader]] = None,
    ) -> None:
        if not tabs:
            raise ValueError("TabController needs at least one panel")
        self._labels: Dict[str, str] = {tab.key: tab.label for tab in tabs}
        self._loaders = dict(loaders or {})
        self._active = next((tab.key for tab in tabs if tab.active), tabs[0].key)

    @property
    def panels(self) -> List[str]:
        return list(self._labels)

    @property
    def active(self) -> str:
        return self._active

    def label(self, panel: str) -> str:
        return self._labels[panel]

    def is_visible(self, panel: str) -> bool:
        return panel == self._active

    def activate(self, panel: str, category: str) -> None:
        if panel not in self._labels:
            raise ValueError(f"Unknown panel {panel!r}")
        self._active = panel
        loader = self._loaders.get(panel)
        if loader is not None:
            logger.debug("Loading panel %s for %s", panel, category)
            loader(category)
