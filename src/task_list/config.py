# src/task_list/config.py

"""Settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per process.
- Nothing here changes sequencing; settings only pick logging defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASK_LIST"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str

    # None -> console logging only
    log_dir: Path | None

    # Use stdlib logging for notices when create() gets no `logger` option.
    default_logger: bool

    @staticmethod
    def from_env(*, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(override=False)

        return Settings(
            app_name=_env(_k("APP_NAME"), "task-list") or "task-list",
            log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
            log_dir=_env_path(_k("LOG_DIR"), None),
            default_logger=_env_bool(_k("DEFAULT_LOGGER"), False),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
