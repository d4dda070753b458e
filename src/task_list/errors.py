# src/task_list/errors.py

from __future__ import annotations

"""
Exception taxonomy.

Every error raised by a pass carries the structured list of failures observed
during that pass, so callers can inspect the root causes programmatically.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tasks.task_models import Failure


class TaskListError(Exception):
    """Base class for all task-list errors."""

    def __init__(self, message: str, *, failures: list[Failure] | None = None) -> None:
        super().__init__(message)
        self.failures: list[Failure] = list(failures or [])


class TaskValidationError(TaskListError, ValueError):
    """Raised at construction time; no registry is produced."""


class TaskStartError(TaskListError):
    """A start pass stopped at the first failing task."""


class TaskStopError(TaskListError):
    """One or more tasks failed to stop (the pass still visited all of them)."""
