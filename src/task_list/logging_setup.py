# src/task_list/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while tasks start and stop:
    - allow task_list logs (notices included)
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress third-party noise unless ERROR+; the tasks being run are
      third party from our point of view, WARNING+ is let through for them
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "task_list" or name.startswith("task_list."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        if name == "asyncio":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    log_dir: str | Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Configure logging with:
    - Console handler: filtered, at console_level
    - File handler (only when log_dir is given): everything at file_level

    Call this ONCE, early. Returns the log file path, if any.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    log_file: Path | None = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "task-list.log"

        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
