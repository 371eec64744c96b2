"""
Record file loading: parse one transaction extract into a DataFrame and derive
the table view and scalar summary shown by the record viewer.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional

import pandas as pd

from estate_trends.data.source import ArtifactSource, record_path
from estate_trends.exceptions import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordSummary:
    total_records: int
    amount_count: int = 0
    average_amount: Optional[float] = None


def parse_records(text: str, path: str = "<memory>") -> pd.DataFrame:
    """Parse delimited text with a header row; pandas infers numeric columns per column."""
    try:
        # index_col=False keeps a trailing delimiter from turning the first column into the index
        return pd.read_csv(io.StringIO(text), index_col=False)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except pd.errors.ParserError as exc:
        raise ParseError(str(exc), path=path) from exc


def fetch_records(source: ArtifactSource, category: str, filename: str) -> pd.DataFrame:
    path = record_path(category, filename)
    records = parse_records(source.fetch_text(path), path=path)
    logger.debug("Parsed %s: %d rows, %d columns", path, len(records), len(records.columns))
    return records


def _is_named(column: Any) -> bool:
    name = str(column).strip()
    # pandas names blank header cells "Unnamed: <position>"
    return bool(name) and not name.startswith("Unnamed:")


def visible_columns(records: pd.DataFrame) -> List[str]:
    return [column for column in records.columns if _is_named(column)]


def _display_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return int(value)
    if value is pd.NA or value is pd.NaT:
        return ""
    return value


def table_frame(records: pd.DataFrame) -> pd.DataFrame:
    """Rows in original order over the named columns, with missing cells as empty strings."""
    columns = visible_columns(records)
    if records.empty or not columns:
        return pd.DataFrame(columns=columns)
    return records[columns].astype(object).apply(lambda column: column.map(_display_value))


def summarize(records: pd.DataFrame, monetary_field: str) -> RecordSummary:
    """Count records and average the monetary field over rows holding a numeric value.

    Values that do not coerce to a number (blank, absent, "bad", "1,000") are
    excluded from both the sum and the denominator.
    """
    total = int(len(records))
    if monetary_field not in records.columns:
        return RecordSummary(total_records=total)
    amounts = pd.to_numeric(records[monetary_field], errors="coerce").dropna()
    if amounts.empty:
        return RecordSummary(total_records=total)
    return RecordSummary(
        total_records=total,
        amount_count=int(len(amounts)),
        average_amount=float(amounts.sum() / len(amounts)),
    )
