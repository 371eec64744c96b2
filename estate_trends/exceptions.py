"""
Exception hierarchy shared by the data layer and the dashboard components.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every error raised by the dashboard core."""


class FetchError(DashboardError):
    """An artifact could not be retrieved or decoded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ArtifactMissing(FetchError):
    """The artifact does not exist (yet) at the requested path."""


class ParseError(FetchError):
    """An artifact was retrieved but its structure is malformed."""


class ManifestUnavailable(DashboardError):
    """The file manifest is missing or has no usable structure."""


class TrendUnavailable(DashboardError):
    """A monthly aggregate or observation log is missing or malformed."""
