from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from estate_trends.data.source import LocalSource
from estate_trends.ui.components.charts import ChartConfig

WriteArtifact = Callable[[str, Any], Path]


class RecordingHandle:
    def __init__(self, backend: "RecordingBackend", config: ChartConfig) -> None:
        self._backend = backend
        self.config = config
        self.destroyed = False

    def destroy(self) -> None:
        self.destroyed = True
        self._backend.events.append(("destroy", self.config.kind))


class RecordingBackend:
    """Chart backend that records construct/destroy calls instead of drawing."""

    def __init__(self) -> None:
        self.events: List[tuple] = []
        self.handles: List[RecordingHandle] = []

    def construct(self, config: ChartConfig) -> RecordingHandle:
        handle = RecordingHandle(self, config)
        self.events.append(("construct", config.kind))
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> List[RecordingHandle]:
        return [handle for handle in self.handles if not handle.destroyed]


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def write_artifact(data_root: Path) -> WriteArtifact:
    def _write(path: str, content: Any) -> Path:
        target = data_root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            target.write_text(content, encoding="utf-8")
        else:
            target.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def source(data_root: Path) -> LocalSource:
    return LocalSource(data_root)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


SAMPLE_STATS: Dict[str, Dict[str, int]] = {
    "2025_12": {"total": 30, "종로구": 3},
    "2025_10": {"total": 10, "강남구": 1, "종로구": 2},
    "2025_11": {"total": 20, "강남구": 4},
}

SAMPLE_LOG: List[Dict[str, Any]] = [
    {"observation_date": "2025-11-01", "data": {"10": 90}},
    {"observation_date": "2025-11-15", "data": {"11": 40, "10": 95}},
    {"observation_date": "2025-12-01", "data": {"11": 0, "10": 100}},
    {"observation_date": "2025-12-15", "data": {"12": 5, "11": 80}},
]


@pytest.fixture
def sample_artifacts(data_root: Path, write_artifact: WriteArtifact) -> Path:
    write_artifact("manifest.json", {"trade": ["a.csv"], "rent": []})
    write_artifact("trade/a.csv", "id,거래금액,동\n1,100,역삼동\n2,200,\n3,bad,잠실동\n")
    write_artifact("stats_trade.json", SAMPLE_STATS)
    write_artifact("observation_log_trade.json", SAMPLE_LOG)
    return data_root
