"""
Utility helpers for formatting counts and amounts.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional


def format_number(value: Optional[float], decimals: int = 0) -> str:
    """Thousands-separated, halves rounded away from zero (150.5 -> "151")."""
    if value is None:
        return "–"
    try:
        if math.isnan(value):
            return "–"
        rounded = Decimal(str(value)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
        return f"{rounded:,.{decimals}f}"
    except (TypeError, ValueError, InvalidOperation):
        return "–"


def format_amount(value: Optional[float], unit: str = "unit") -> str:
    """Average deal amount as shown in the record summary, e.g. ``52,300 (unit)``."""
    formatted = format_number(value, decimals=0)
    if formatted == "–":
        return formatted
    return f"{formatted} ({unit})"
