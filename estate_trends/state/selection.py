"""
Active selection state and the bus that announces changes to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional

from estate_trends.config import DEFAULT_CATEGORY, REGION_TOTAL, TABS

logger = logging.getLogger(__name__)


def _initial_tab() -> str:
    return next((tab.key for tab in TABS if tab.active), TABS[0].key)


@dataclass(frozen=True)
class SelectionState:
    category: str = DEFAULT_CATEGORY
    selected_file: Optional[str] = None
    selected_region: str = REGION_TOTAL
    active_tab: str = field(default_factory=_initial_tab)

    def with_changes(self, **changes: Any) -> "SelectionState":
        return replace(self, **changes)


@dataclass(frozen=True)
class SelectionChanged:
    field: str
    previous: Any
    current: Any
    source: str = ""


Listener = Callable[[SelectionChanged], None]


class SelectionBus:
    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, event: SelectionChanged) -> None:
        logger.debug("Selection changed: %s %r -> %r (%s)", event.field, event.previous, event.current, event.source)
        for listener in list(self._listeners):
            listener(event)
