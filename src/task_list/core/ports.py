# src/task_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The sequencer only talks to a TaskLogger; how notices end up on a console,
in a file or in a test fake is decided here, at construction time.
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol

NOTICE_LOGGER_NAME = "task_list.notices"

CompletionCallback = Callable[[Any], None]
# Error-first completion handle: callback(err) with err=None on success.


class TaskLogger(Protocol):
    """Sink for human-readable lifecycle notices."""

    def info(self, message: str) -> None: ...
    def success(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


def _noop(message: str) -> None:
    return None


class NullTaskLogger:
    """Drops every notice."""

    def info(self, message: str) -> None:
        return None

    def success(self, message: str) -> None:
        return None

    def error(self, message: str) -> None:
        return None


class LoggingTaskLogger:
    """
    Routes notices into stdlib logging.

    There is no "success" level in logging, so success notices go out at INFO.
    """

    def __init__(self, target: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        self._log = target if target is not None else logging.getLogger(NOTICE_LOGGER_NAME)

    def info(self, message: str) -> None:
        self._log.info(message)

    def success(self, message: str) -> None:
        self._log.info(message)

    def error(self, message: str) -> None:
        self._log.error(message)


class PartialTaskLogger:
    """
    Wraps a user object that implements only some of info/success/error.
    Missing hooks are no-ops.
    """

    def __init__(self, target: Any) -> None:
        self._target = target
        self.info = self._hook("info")
        self.success = self._hook("success")
        self.error = self._hook("error")

    def _hook(self, name: str) -> Callable[[str], None]:
        fn = getattr(self._target, name, None)
        if callable(fn):
            return fn
        if isinstance(self._target, dict):
            fn = self._target.get(name)
            if callable(fn):
                return fn
        return _noop


def resolve_task_logger(raw: Any, *, default_enabled: bool = False) -> TaskLogger:
    """
    Normalize the `logger` construction option.

    - None/False  -> no-op (or stdlib logging when default_enabled)
    - True        -> stdlib logging under "task_list.notices"
    - Logger      -> stdlib logging through that logger
    - other       -> whichever of info/success/error it provides
    """
    if raw is None or raw is False:
        return LoggingTaskLogger() if default_enabled else NullTaskLogger()
    if raw is True:
        return LoggingTaskLogger()
    if isinstance(raw, (logging.Logger, logging.LoggerAdapter)):
        return LoggingTaskLogger(raw)
    if isinstance(raw, (NullTaskLogger, LoggingTaskLogger, PartialTaskLogger)):
        return raw
    return PartialTaskLogger(raw)
