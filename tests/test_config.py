# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_list.config import Settings, get_settings


def test_defaults() -> None:
    s = Settings.from_env(load_env_file=False)

    assert s.app_name == "task-list"
    assert s.log_level == "INFO"
    assert s.log_dir is None
    assert s.default_logger is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASK_LIST_APP_NAME", "api")
    monkeypatch.setenv("TASK_LIST_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASK_LIST_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TASK_LIST_DEFAULT_LOGGER", "on")

    s = Settings.from_env(load_env_file=False)

    assert s.app_name == "api"
    assert s.log_level == "DEBUG"
    assert s.log_dir == tmp_path / "logs"
    assert s.default_logger is True


def test_dotenv_file_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("TASK_LIST_APP_NAME=from-dotenv\n", "utf-8")
    # set+del so monkeypatch removes what load_dotenv writes
    monkeypatch.setenv("TASK_LIST_APP_NAME", "placeholder")
    monkeypatch.delenv("TASK_LIST_APP_NAME")
    monkeypatch.setattr("task_list.config.load_dotenv", lambda override=False: _load(env_file, override))

    assert Settings.from_env().app_name == "from-dotenv"


def _load(path: Path, override: bool) -> bool:
    from dotenv import load_dotenv

    return load_dotenv(path, override=override)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
