# src/task_list/tasks/task_models.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TaskState(StrEnum):
    """
    Task lifecycle state.

    Notes:
    - DISABLED, STOPPED and ERROR end a pass, not the task: a later start_all
      may move the task forward again.
    - Nothing moves a task out of DISABLED except a later start_all.
    """

    INITIAL = "initial"
    DISABLED = "disabled"
    STARTED = "started"
    STOPPED = "stopped"
    ERROR = "error"


_NOTICES: dict[str, dict[str, str]] = {
    "service": {
        "disabled": 'Service "{name}" is disabled.',
        "starting": 'Starting service "{name}"...',
        "started": 'Service "{name}" started.',
        "start_error": 'Error starting service "{name}".',
        "stopping": 'Stopping service "{name}"...',
        "stopped": 'Service "{name}" stopped.',
        "stop_error": 'Error stopping service "{name}".',
    },
    "task": {
        "disabled": 'Task "{name}" is disabled.',
        "starting": 'Starting task "{name}"...',
        "started": 'Task "{name}" completed.',
        "start_error": 'Error running task "{name}".',
        "stopping": 'Stopping task "{name}"...',
        "stopped": 'Task "{name}" stopped.',
        "stop_error": 'Error stopping task "{name}".',
    },
}


class TaskType(StrEnum):
    """
    Kind of task. Only affects the wording of lifecycle notices.
    """

    SERVICE = "service"
    TASK = "task"

    @classmethod
    def parse(cls, raw: str | TaskType | None) -> TaskType:
        """
        Resolve a user-supplied type (case-insensitive). None means TASK.

        Raises ValueError for unknown names; the registry turns it into a
        validation error.
        """
        if raw is None or raw == "":
            return cls.TASK
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"task type must be a string, got {type(raw).__name__}")
        return cls(raw.strip().lower())

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]

    def _notice(self, key: str, task: Task) -> str:
        return _NOTICES[self.value][key].format(name=task.name)

    def disabled_message(self, task: Task) -> str:
        return self._notice("disabled", task)

    def starting_message(self, task: Task) -> str:
        return self._notice("starting", task)

    def started_message(self, task: Task) -> str:
        return self._notice("started", task)

    def start_error_message(self, task: Task) -> str:
        return self._notice("start_error", task)

    def stopping_message(self, task: Task) -> str:
        return self._notice("stopping", task)

    def stopped_message(self, task: Task) -> str:
        return self._notice("stopped", task)

    def stop_error_message(self, task: Task) -> str:
        return self._notice("stop_error", task)


Operation = Callable[..., Any]
Disabled = bool | Callable[[], Any] | None


@dataclass(slots=True, eq=False)
class Task:
    name: str
    type: TaskType = TaskType.TASK
    state: TaskState = TaskState.INITIAL

    disabled: Disabled = None
    start: Operation | None = None
    stop: Operation | None = None

    # The descriptor (mapping or object) this task was built from.
    source: Any = field(default=None, repr=False)

    @property
    def is_statically_disabled(self) -> bool:
        return not callable(self.disabled) and bool(self.disabled)

    def is_disabled(self) -> bool:
        """Evaluate `disabled` now (calls the predicate if there is one)."""
        if callable(self.disabled):
            return bool(self.disabled())
        return bool(self.disabled)


@dataclass(slots=True, frozen=True)
class Failure:
    """A task paired with the raw error its operation reported."""

    task: Task
    err: Any
