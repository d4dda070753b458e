# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_list.config import Settings, get_settings

from .fakes import FakeTaskLogger, Journal


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Explicit settings for unit tests.

    We build Settings directly rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        app_name="task-list-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        default_logger=False,
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """No TASK_LIST_* leakage from the developer's shell or a stray .env."""
    for key in ("TASK_LIST_APP_NAME", "TASK_LIST_LOG_LEVEL", "TASK_LIST_LOG_DIR", "TASK_LIST_DEFAULT_LOGGER"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def notices() -> FakeTaskLogger:
    return FakeTaskLogger()


@pytest.fixture()
def journal() -> Journal:
    return Journal()
