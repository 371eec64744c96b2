from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class RequestFence:
    """Monotonic request tokens: only the completion of the latest request is applied."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def invalidate(self) -> None:
        """Make every outstanding token stale without starting a new request."""
        self._latest += 1

    def is_current(self, token: int) -> bool:
        if token == self._latest:
            return True
        logger.debug("%s: discarding stale completion %d (latest %d)", self.name, token, self._latest)
        return False
