"""
Monthly aggregate helpers: validation, region vocabulary and the per-month
series behind the monthly trend bar chart.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from estate_trends.config import AGGREGATE_TOTAL_KEY, REGION_TOTAL
from estate_trends.exceptions import TrendUnavailable

Aggregate = Mapping[str, Mapping[str, int]]


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_aggregate(payload: Any) -> Dict[str, Dict[str, int]]:
    """Validate a decoded `month -> region -> count` payload."""
    if not isinstance(payload, dict):
        raise TrendUnavailable("Aggregate is not a JSON object")
    aggregate: Dict[str, Dict[str, int]] = {}
    for month, counts in payload.items():
        if not isinstance(counts, dict):
            raise TrendUnavailable(f"Month {month!r} is not an object")
        if AGGREGATE_TOTAL_KEY not in counts:
            raise TrendUnavailable(f"Month {month!r} has no {AGGREGATE_TOTAL_KEY!r} count")
        bad = [region for region, count in counts.items() if not _is_count(count)]
        if bad:
            raise TrendUnavailable(f"Month {month!r} has non-integer counts for {bad}")
        aggregate[month] = dict(counts)
    return aggregate


def region_vocabulary(aggregate: Aggregate) -> List[str]:
    """Sorted union of every region key across all months, excluding the total."""
    regions = set()
    for counts in aggregate.values():
        regions.update(key for key in counts if key != AGGREGATE_TOTAL_KEY)
    return sorted(regions)


def monthly_series(aggregate: Aggregate, region: str) -> Tuple[List[str], List[int]]:
    """Month labels in lexicographic order and one count per month.

    Month keys are zero-padded (`2025_01`), so lexicographic order is
    chronological. Regions missing from a month count as 0.
    """
    months = sorted(aggregate)
    key = AGGREGATE_TOTAL_KEY if region == REGION_TOTAL else region
    return months, [aggregate[month].get(key, 0) for month in months]
