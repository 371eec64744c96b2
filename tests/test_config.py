from __future__ import annotations

import logging

import pytest

from estate_trends.config import DEFAULT_MONETARY_FIELD, TABS, Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ESTATE_DATA_ROOT", "ESTATE_MONETARY_FIELD", "ESTATE_FETCH_TIMEOUT", "ESTATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings == Settings()
    assert settings.monetary_field == DEFAULT_MONETARY_FIELD


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ESTATE_DATA_ROOT", "https://example.org/data")
    monkeypatch.setenv("ESTATE_MONETARY_FIELD", "보증금")
    monkeypatch.setenv("ESTATE_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("ESTATE_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.data_root == "https://example.org/data"
    assert settings.monetary_field == "보증금"
    assert settings.fetch_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_invalid_timeout_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ESTATE_FETCH_TIMEOUT", "soon")
    assert Settings.from_env().fetch_timeout == Settings().fetch_timeout


def test_exactly_one_initial_tab() -> None:
    assert [tab.key for tab in TABS if tab.active] == ["records"]


def test_configure_logging_takes_level_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from estate_trends import bootstrap_env

    calls = []
    monkeypatch.setattr(bootstrap_env.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    bootstrap_env.configure_logging(Settings(log_level="WARNING"))
    monkeypatch.setenv("ESTATE_LOG_LEVEL", "debug")
    bootstrap_env.configure_logging()

    assert [call["level"] for call in calls] == [logging.WARNING, logging.DEBUG]
