"""
Observation log helpers: each snapshot records, at one observation time, the
transaction counts reported so far for a handful of target months.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from estate_trends.exceptions import TrendUnavailable

TIMESTAMP_FIELD = "observation_date"
DATA_FIELD = "data"


@dataclass(frozen=True)
class Snapshot:
    observed_at: str
    counts: Mapping[str, int]


def parse_observation_log(payload: Any) -> List[Snapshot]:
    if not isinstance(payload, list):
        raise TrendUnavailable("Observation log is not a JSON array")
    snapshots: List[Snapshot] = []
    for position, entry in enumerate(payload):
        if not isinstance(entry, dict) or not isinstance(entry.get(DATA_FIELD), dict):
            raise TrendUnavailable(f"Snapshot {position} has no {DATA_FIELD!r} object")
        snapshots.append(Snapshot(observed_at=str(entry.get(TIMESTAMP_FIELD, "")), counts=dict(entry[DATA_FIELD])))
    return snapshots


def target_months(log: Sequence[Snapshot]) -> List[str]:
    """Target months tracked by the most recent snapshot, in its own key order."""
    if not log:
        return []
    return list(log[-1].counts)


def observed_series(log: Sequence[Snapshot]) -> Tuple[List[str], List[Tuple[str, List[Optional[int]]]]]:
    """Observation labels in log order plus one series per target month.

    A snapshot that lacks a target month contributes a gap (None), never 0.
    """
    labels = [snapshot.observed_at for snapshot in log]
    series = [
        (month, [snapshot.counts.get(month) for snapshot in log])
        for month in target_months(log)
    ]
    return labels, series


def series_color(index: int) -> str:
    # Golden-angle hue rotation keeps neighbouring series apart
    return f"hsl({(index * 137.5) % 360:g}, 70%, 50%)"
