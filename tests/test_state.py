from __future__ import annotations

from typing import List

import pytest

from estate_trends.config import TABS
from estate_trends.state.fence import RequestFence
from estate_trends.state.selection import SelectionBus, SelectionChanged, SelectionState
from estate_trends.state.sync import CategorySync
from estate_trends.state.tabs import TabController


def _recording_bus() -> tuple[SelectionBus, List[SelectionChanged]]:
    bus = SelectionBus()
    events: List[SelectionChanged] = []
    bus.subscribe(events.append)
    return bus, events


def test_selection_state_defaults() -> None:
    state = SelectionState()
    assert (state.category, state.selected_file, state.selected_region, state.active_tab) == (
        "trade",
        None,
        "Total",
        "records",
    )
    changed = state.with_changes(category="rent")
    assert changed.category == "rent"
    assert state.category == "trade"


def test_bus_unsubscribe() -> None:
    bus = SelectionBus()
    seen: List[SelectionChanged] = []
    unsubscribe = bus.subscribe(seen.append)
    unsubscribe()
    bus.publish(SelectionChanged("category", "trade", "rent"))
    assert seen == []


def test_primary_change_updates_secondary_once() -> None:
    bus, events = _recording_bus()
    sync = CategorySync(bus)

    assert sync.on_primary_changed("rent")

    assert sync.secondary == "rent"
    assert events == [SelectionChanged("category", "trade", "rent", source="primary")]


def test_secondary_change_is_symmetric() -> None:
    bus, events = _recording_bus()
    sync = CategorySync(bus)

    sync.on_secondary_changed("rent")

    assert sync.primary == "rent"
    assert [event.source for event in events] == ["secondary"]


def test_listener_writing_back_does_not_recurse() -> None:
    bus, events = _recording_bus()
    sync = CategorySync(bus)
    calls = []

    def _mirror(event: SelectionChanged) -> None:
        calls.append(event)
        # A view echoing the new value back must not start another hop
        sync.on_secondary_changed(event.current)
        sync.on_primary_changed(event.current)

    bus.subscribe(_mirror)
    sync.on_primary_changed("rent")

    assert len(events) == 1
    assert len(calls) == 1
    assert (sync.primary, sync.secondary) == ("rent", "rent")


def test_unchanged_value_raises_no_event() -> None:
    bus, events = _recording_bus()
    sync = CategorySync(bus)

    assert not sync.on_primary_changed("trade")
    assert events == []


def test_unknown_category_rejected() -> None:
    sync = CategorySync(SelectionBus())
    with pytest.raises(ValueError):
        sync.on_primary_changed("auction")


def test_fence_only_latest_token_is_current() -> None:
    fence = RequestFence("test")
    first = fence.issue()
    second = fence.issue()

    assert not fence.is_current(first)
    assert fence.is_current(second)

    fence.invalidate()
    assert not fence.is_current(second)


def test_tab_controller_starts_on_marked_panel() -> None:
    tabs = TabController(TABS)
    assert tabs.active == "records"
    assert tabs.is_visible("records")
    assert not tabs.is_visible("monthly_trend")


def test_tab_activation_is_exclusive_and_loads_every_visit() -> None:
    loads: List[tuple] = []
    tabs = TabController(
        TABS,
        loaders={
            "monthly_trend": lambda category: loads.append(("monthly_trend", category)),
            "observed_trend": lambda category: loads.append(("observed_trend", category)),
        },
    )

    tabs.activate("monthly_trend", "trade")
    tabs.activate("records", "trade")
    tabs.activate("monthly_trend", "rent")
    tabs.activate("observed_trend", "rent")

    assert [panel for panel in tabs.panels if tabs.is_visible(panel)] == ["observed_trend"]
    assert loads == [("monthly_trend", "trade"), ("monthly_trend", "rent"), ("observed_trend", "rent")]


def test_tab_controller_rejects_unknown_panel() -> None:
    tabs = TabController(TABS)
    with pytest.raises(ValueError):
        tabs.activate("settings", "trade")
    assert tabs.active == "records"
