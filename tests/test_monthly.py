from __future__ import annotations

import pytest

from estate_trends.core.monthly import MonthlyTrendEngine
from estate_trends.data.aggregates import monthly_series, parse_aggregate, region_vocabulary
from estate_trends.data.source import LocalSource
from estate_trends.exceptions import TrendUnavailable
from estate_trends.ui.components.charts import ChartSlot

STATS = {
    "2025_12": {"total": 30, "종로구": 3},
    "2025_10": {"total": 10, "강남구": 1, "종로구": 2},
    "2025_11": {"total": 20, "강남구": 4},
}


@pytest.fixture
def engine(source: LocalSource, backend) -> MonthlyTrendEngine:
    return MonthlyTrendEngine(source, ChartSlot("monthlyChart", backend))


def test_region_vocabulary_is_sorted_union_without_total() -> None:
    assert region_vocabulary(STATS) == ["강남구", "종로구"]
    assert region_vocabulary({}) == []


def test_monthly_series_sorts_months_and_fills_sparse_regions() -> None:
    assert monthly_series(STATS, "Total") == (["2025_10", "2025_11", "2025_12"], [10, 20, 30])
    assert monthly_series(STATS, "강남구") == (["2025_10", "2025_11", "2025_12"], [1, 4, 0])


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"2025_11": [1, 2]},
        {"2025_11": {"강남구": 3}},
        {"2025_11": {"total": "3"}},
        {"2025_11": {"total": True}},
    ],
)
def test_parse_aggregate_rejects_malformed(payload) -> None:
    with pytest.raises(TrendUnavailable):
        parse_aggregate(payload)


def test_load_populates_regions_and_draws_total(write_artifact, engine: MonthlyTrendEngine, backend) -> None:
    write_artifact("stats_trade.json", STATS)

    assert engine.load("trade")

    assert engine.region_options == ["Total", "강남구", "종로구"]
    config = engine.slot.config
    assert config.kind == "bar"
    assert config.labels == ("2025_10", "2025_11", "2025_12")
    assert config.series[0].data == (10, 20, 30)
    assert config.series[0].label == "Total Transactions (Seoul Total, trade)"
    assert len(backend.live) == 1


def test_second_load_does_not_duplicate_or_drop_regions(write_artifact, engine: MonthlyTrendEngine) -> None:
    write_artifact("stats_trade.json", STATS)
    engine.load("trade")

    write_artifact("stats_trade.json", {"2026_01": {"total": 5, "노원구": 5}})
    engine.load("trade")

    assert engine.region_options == ["Total", "강남구", "종로구"]
    assert engine.slot.config.labels == ("2026_01",)


def test_region_change_renders_from_cache(write_artifact, data_root, engine: MonthlyTrendEngine, backend) -> None:
    write_artifact("stats_trade.json", STATS)
    engine.load("trade")
    (data_root / "stats_trade.json").unlink()

    config = engine.on_region_changed("종로구")

    assert config.series[0].data == (2, 0, 3)
    assert config.series[0].label == "Transactions (종로구, trade)"
    assert engine.selected_region == "종로구"
    assert backend.events[-2:] == [("destroy", "bar"), ("construct", "bar")]
    assert len(backend.live) == 1


def test_region_change_without_cache_is_noop(engine: MonthlyTrendEngine, backend) -> None:
    assert engine.on_region_changed("강남구") is None
    assert backend.events == []


def test_missing_stats_fail_silently(engine: MonthlyTrendEngine, backend) -> None:
    assert not engine.load("rent")
    assert not engine.cached
    assert engine.slot.handle is None
    assert backend.events == []


def test_malformed_stats_keep_previous_chart(write_artifact, engine: MonthlyTrendEngine, backend) -> None:
    write_artifact("stats_trade.json", STATS)
    engine.load("trade")
    write_artifact("stats_trade.json", {"2025_11": "oops"})

    assert not engine.load("trade")

    assert engine.slot.config.labels == ("2025_10", "2025_11", "2025_12")
    assert len(backend.live) == 1


def test_empty_aggregate_draws_nothing(write_artifact, engine: MonthlyTrendEngine) -> None:
    write_artifact("stats_trade.json", {})

    assert engine.load("trade")

    assert engine.slot.handle is None
    assert engine.region_options == ["Total"]


def test_invalidate_resets_vocabulary_and_chart(write_artifact, engine: MonthlyTrendEngine, backend) -> None:
    write_artifact("stats_trade.json", STATS)
    write_artifact("stats_rent.json", {"2025_11": {"total": 7, "마포구": 7}})
    engine.load("trade")
    engine.on_region_changed("강남구")

    engine.invalidate()
    assert backend.live == []
    engine.load("rent")

    assert engine.region_options == ["Total", "마포구"]
    assert engine.selected_region == "Total"
    assert engine.slot.config.series[0].data == (7,)


def test_loading_another_category_replaces_cache(write_artifact, engine: MonthlyTrendEngine) -> None:
    write_artifact("stats_trade.json", STATS)
    write_artifact("stats_rent.json", {"2025_11": {"total": 7, "마포구": 7}})
    engine.load("trade")

    engine.load("rent")

    assert engine.category == "rent"
    assert engine.region_options == ["Total", "마포구"]


class _ReentrantSource(LocalSource):
    """Switches the engine to rent while the trade fetch is still in flight."""

    def __init__(self, root, engine_ref) -> None:
        super().__init__(root)
        self.engine_ref = engine_ref
        self.calls = 0

    def fetch_json(self, path: str):
        self.calls += 1
        if self.calls == 1:
            engine = self.engine_ref[0]
            engine.invalidate()
            engine.load("rent")
        return super().fetch_json(path)


def test_category_switch_discards_stale_trade_completion(write_artifact, data_root, backend) -> None:
    write_artifact("stats_trade.json", {"2025_11": {"total": 5, "A": 1}})
    write_artifact("stats_rent.json", {"2025_11": {"total": 7, "B": 2}})
    engine_ref = []
    engine = MonthlyTrendEngine(_ReentrantSource(data_root, engine_ref), ChartSlot("monthlyChart", backend))
    engine_ref.append(engine)

    assert not engine.load("trade")

    assert engine.category == "rent"
    assert engine.region_options == ["Total", "B"]
    assert engine.slot.config.series[0].data == (7,)
    assert len(backend.live) == 1
