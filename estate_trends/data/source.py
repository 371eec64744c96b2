"""
Artifact transport: read the pre-generated dashboard artifacts from a local
directory or from a static HTTP host.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Optional

import requests

from estate_trends.config import DEFAULT_FETCH_TIMEOUT
from estate_trends.exceptions import ArtifactMissing, FetchError, ParseError

logger = logging.getLogger(__name__)

MANIFEST_PATH = "manifest.json"


def record_path(category: str, filename: str) -> str:
    if not filename or PurePosixPath(filename).name != filename:
        raise ValueError(f"Invalid record filename: {filename!r}")
    return f"{category}/{filename}"


def stats_path(category: str) -> str:
    return f"stats_{category}.json"


def observation_log_path(category: str) -> str:
    return f"observation_log_{category}.json"


class ArtifactSource:
    """Read-only access to artifacts addressed by a relative path."""

    def fetch_text(self, path: str) -> str:
        raise NotImplementedError

    def fetch_json(self, path: str) -> Any:
        text = self.fetch_text(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON in {path}: {exc}", path=path) from exc


class LocalSource(ArtifactSource):
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def fetch_text(self, path: str) -> str:
        target = self.root / path
        logger.debug("Reading %s", target)
        try:
            # utf-8-sig strips the BOM the extract scripts write for spreadsheet tools
            return target.read_text(encoding="utf-8-sig")
        except FileNotFoundError as exc:
            raise ArtifactMissing(f"{path} not found", path=path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(f"Could not read {path}: {exc}", path=path) from exc

    def __repr__(self) -> str:
        return f"LocalSource({str(self.root)!r})"


class HttpSource(ArtifactSource):
    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_text(self, path: str) -> str:
        url = self.base_url + path
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                raise ArtifactMissing(f"{path} not found", path=path)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Could not fetch {path}: {exc}", path=path) from exc
        # Static hosts often omit the charset; the artifacts are always UTF-8
        try:
            return response.content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FetchError(f"Could not decode {path}: {exc}", path=path) from exc

    def __repr__(self) -> str:
        return f"HttpSource({self.base_url!r})"


def open_source(root: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> ArtifactSource:
    """Pick the transport for a data root: http(s) URLs are fetched, anything else is a directory."""
    if root.startswith(("http://", "https://")):
        return HttpSource(root, timeout=timeout)
    return LocalSource(root)
