"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Tuple

logger = logging.getLogger(__name__)

CATEGORIES: Tuple[str, ...] = ("trade", "rent")
DEFAULT_CATEGORY = "trade"

# Region selector sentinel and the matching aggregate key
REGION_TOTAL = "Total"
AGGREGATE_TOTAL_KEY = "total"

DEFAULT_DATA_ROOT = "assets/data"
DEFAULT_MONETARY_FIELD = "거래금액"  # dealAmount column of the trade extracts
DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str
    active: bool = False


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("records", "Data Viewer", active=True),
    TabConfig("monthly_trend", "Monthly Trend"),
    TabConfig("observed_trend", "Observed Trend"),
]


@dataclass(frozen=True)
class Settings:
    data_root: str = DEFAULT_DATA_ROOT
    monetary_field: str = DEFAULT_MONETARY_FIELD
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Resolve settings from environment variables (secrets are bridged in by bootstrap_env)."""
        raw_timeout = os.getenv("ESTATE_FETCH_TIMEOUT")
        timeout = DEFAULT_FETCH_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning("Ignoring invalid ESTATE_FETCH_TIMEOUT=%r", raw_timeout)
        return cls(
            data_root=os.getenv("ESTATE_DATA_ROOT") or DEFAULT_DATA_ROOT,
            monetary_field=os.getenv("ESTATE_MONETARY_FIELD") or DEFAULT_MONETARY_FIELD,
            fetch_timeout=timeout,
            log_level=(os.getenv("ESTATE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
