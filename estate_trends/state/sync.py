"""
Category selector sync: the record view and the trend views each show a
category selector, and both must always agree.
"""

from __future__ import annotations

from estate_trends.config import CATEGORIES, DEFAULT_CATEGORY
from estate_trends.state.selection import SelectionBus, SelectionChanged

PRIMARY = "primary"
SECONDARY = "secondary"


class CategorySync:
    """Mirror a category change from one selector onto the other, exactly one hop.

    A change raises a single ``SelectionChanged("category", ...)`` event on the
    bus. Changes arriving while that event is being delivered are ignored, so a
    listener that writes back to either selector cannot start a loop.
    """

    def __init__(self, bus: SelectionBus, initial: str = DEFAULT_CATEGORY) -> None:
        self._check(initial)
        self._bus = bus
        self._values = {PRIMARY: initial, SECONDARY: initial}
        self._propagating = False

    @staticmethod
    def _check(value: str) -> None:
        if value not in CATEGORIES:
            raise ValueError(f"Unknown category {value!r}; expected one of {CATEGORIES}")

    @property
    def primary(self) -> str:
        return self._values[PRIMARY]

    @property
    def secondary(self) -> str:
        return self._values[SECONDARY]

    def on_primary_changed(self, value: str) -> bool:
        return self._changed(PRIMARY, SECONDARY, value)

    def on_secondary_changed(self, value: str) -> bool:
        return self._changed(SECONDARY, PRIMARY, value)

    def _changed(self, endpoint: str, other: str, value: str) -> bool:
        self._check(value)
        if self._propagating:
            return False
        self._values[endpoint] = value
        previous = self._values[other]
        if previous == value:
            return False
        self._propagating = True
        try:
            self._values[other] = value
            self._bus.publish(SelectionChanged("category", previous, value, source=endpoint))
        finally:
            self._propagating = False
        return True
