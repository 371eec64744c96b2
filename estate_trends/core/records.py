from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from estate_trends.data.records import RecordSummary, fetch_records, summarize, table_frame
from estate_trends.data.source import ArtifactSource
from estate_trends.exceptions import FetchError, ParseError
from estate_trends.state.fence import RequestFence

logger = logging.getLogger(__name__)


class RecordViewer:
    """Load one record file and hold its table, summary and status text.

    Every load clears the previous table and summary; failures are reported
    through ``status`` so the user can retry.
    """

    def __init__(self, source: ArtifactSource, monetary_field: str) -> None:
        self._source = source
        self.monetary_field = monetary_field
        self._fence = RequestFence("records")
        self.status = ""
        self.failed = False
        self.filename: Optional[str] = None
        self.records: Optional[pd.DataFrame] = None
        self.table: Optional[pd.DataFrame] = None
        self.summary: Optional[RecordSummary] = None

    def clear(self) -> None:
        self._fence.invalidate()
        self.status = ""
        self.failed = False
        self.filename = None
        self.records = None
        self.table = None
        self.summary = None

    def load(self, category: str, filename: str) -> bool:
        token = self._fence.issue()
        self.status = f"Loading {filename}..."
        self.failed = False
        self.filename = filename
        self.records = None
        self.table = None
        self.summary = None
        try:
            records = fetch_records(self._source, category, filename)
        except ParseError as exc:
            if self._fence.is_current(token):
                logger.warning("Could not parse %s/%s: %s", category, filename, exc)
                self.status = f"Error parsing CSV: {exc}"
                self.failed = True
            return False
        except (FetchError, ValueError) as exc:
            if self._fence.is_current(token):
                logger.warning("Could not load %s/%s: %s", category, filename, exc)
                self.status = f"Error loading {filename}: {exc}"
                self.failed = True
            return False
        if not self._fence.is_current(token):
            return False

        self.records = records
        self.status = f"Loaded {len(records)} records."
        self.table = table_frame(records) if not records.empty else None
        self.summary = summarize(records, self.monetary_field)
        logger.info("Loaded %s/%s (%d records)", category, filename, len(records))
        return True
