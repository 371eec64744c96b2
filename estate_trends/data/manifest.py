"""
Manifest registry: the selectable (category, file) pairs that feed the record
viewer's file selector.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from estate_trends.config import CATEGORIES
from estate_trends.data.source import MANIFEST_PATH, ArtifactSource
from estate_trends.exceptions import FetchError, ManifestUnavailable

logger = logging.getLogger(__name__)

NO_FILES_PLACEHOLDER = "No files found"

Manifest = Mapping[str, Tuple[str, ...]]


def empty_manifest() -> Dict[str, Tuple[str, ...]]:
    return {category: () for category in CATEGORIES}


def parse_manifest(payload: Any) -> Dict[str, Tuple[str, ...]]:
    """Validate a decoded manifest payload; categories missing from it have no files."""
    if not isinstance(payload, dict):
        raise ManifestUnavailable("Manifest is not a JSON object")
    manifest = empty_manifest()
    for category in CATEGORIES:
        files = payload.get(category, [])
        if files is None:
            continue
        if not isinstance(files, list) or not all(isinstance(name, str) for name in files):
            raise ManifestUnavailable(f"Manifest entry {category!r} is not a list of filenames")
        manifest[category] = tuple(files)
    return manifest


@dataclass(frozen=True)
class FileSelector:
    options: Tuple[str, ...]
    disabled: bool

    @property
    def load_enabled(self) -> bool:
        return not self.disabled

    @property
    def default(self) -> Optional[str]:
        return None if self.disabled else self.options[0]


class ManifestRegistry:
    def __init__(self, source: ArtifactSource) -> None:
        self._source = source
        self._manifest: Dict[str, Tuple[str, ...]] = empty_manifest()
        self.loaded = False

    @property
    def manifest(self) -> Manifest:
        return dict(self._manifest)

    def load(self) -> Manifest:
        """Fetch the manifest; on failure keep the empty manifest and raise ManifestUnavailable."""
        try:
            manifest = parse_manifest(self._source.fetch_json(MANIFEST_PATH))
        except (FetchError, ManifestUnavailable) as exc:
            self._manifest = empty_manifest()
            self.loaded = False
            logger.warning("Manifest unavailable from %r: %s", self._source, exc)
            if isinstance(exc, ManifestUnavailable):
                raise
            raise ManifestUnavailable(str(exc)) from exc
        self._manifest = manifest
        self.loaded = True
        logger.info(
            "Loaded manifest: %s",
            ", ".join(f"{category}={len(files)}" for category, files in manifest.items()),
        )
        return self.manifest

    def files_for(self, category: str) -> Tuple[str, ...]:
        return self._manifest.get(category, ())

    def file_selector(self, category: str) -> FileSelector:
        files = self.files_for(category)
        if not files:
            return FileSelector(options=(NO_FILES_PLACEHOLDER,), disabled=True)
        return FileSelector(options=files, disabled=False)
