# src/task_list/tasks/task_registry.py

from __future__ import annotations

"""
Task registry.

Turns caller-supplied descriptors into Task records:
- assigns "#<index>" names to unnamed tasks,
- resolves type strings to TaskType,
- validates start/stop signatures,
- builds the name -> task index.

Construction is all-or-nothing: any invalid descriptor raises
TaskValidationError and nothing is returned.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from ..errors import TaskValidationError
from .completion import required_positional_args
from .task_models import Task, TaskState, TaskType

logger = logging.getLogger(__name__)

_MISSING = object()


def _field(descriptor: Any, name: str, default: Any = None) -> Any:
    """Read a descriptor field from a mapping or an attribute."""
    if isinstance(descriptor, Mapping):
        return descriptor.get(name, default)
    return getattr(descriptor, name, default)


def split_options(options: Any) -> tuple[Any, Any]:
    """
    Accept either a bare sequence of descriptors or a configuration with
    `tasks` (+ optional `logger`). Returns (tasks, logger).
    """
    if isinstance(options, (list, tuple)):
        return options, None

    tasks = _field(options, "tasks", _MISSING)
    if tasks is _MISSING or tasks is None:
        raise TaskValidationError('Missing "tasks" in task list options')
    return tasks, _field(options, "logger")


def _check_operation(name: str, prop: str, fn: Any) -> None:
    if fn is None:
        return
    if not callable(fn):
        raise TaskValidationError(f'Task "{name}" has invalid "{prop}": expected a callable')
    arity = required_positional_args(fn)
    if arity is not None and arity > 1:
        raise TaskValidationError(
            f'Task "{name}" has invalid "{prop}" function. '
            "It should accept no arguments, or one argument which is a callback."
        )


def build_task(descriptor: Any, index: int) -> Task:
    if descriptor is None or isinstance(descriptor, (str, bytes)):
        raise TaskValidationError(f"Task #{index} is not a task descriptor: {descriptor!r}")

    raw_name = _field(descriptor, "name")
    name = str(raw_name) if raw_name else f"#{index}"

    raw_type = _field(descriptor, "type")
    try:
        task_type = TaskType.parse(raw_type)
    except ValueError:
        raise TaskValidationError(
            f'Invalid task type: "{raw_type}". Should be one of: {", ".join(TaskType.names())}'
        ) from None

    start = _field(descriptor, "start")
    stop = _field(descriptor, "stop")
    _check_operation(name, "start", start)
    _check_operation(name, "stop", stop)

    return Task(
        name=name,
        type=task_type,
        state=TaskState.INITIAL,
        disabled=_field(descriptor, "disabled"),
        start=start,
        stop=stop,
        source=descriptor,
    )


class TaskRegistry:
    """
    Ordered, read-only collection of tasks.

    Only the sequencer writes to Task.state; the list and the index never
    change after construction.
    """

    def __init__(self, descriptors: Sequence[Any]) -> None:
        if not isinstance(descriptors, (list, tuple)):
            raise TaskValidationError(
                f'"tasks" should be a list of task descriptors, got {type(descriptors).__name__}'
            )

        tasks: list[Task] = []
        by_name: dict[str, Task] = {}
        for index, descriptor in enumerate(descriptors):
            task = build_task(descriptor, index)
            if _field(descriptor, "name"):
                if task.name in by_name:
                    raise TaskValidationError(f'Duplicate task name: "{task.name}"')
                by_name[task.name] = task
            tasks.append(task)

        self._tasks: tuple[Task, ...] = tuple(tasks)
        self._by_name = by_name
        logger.debug("Registered %d task(s): %s", len(tasks), ", ".join(t.name for t in tasks))

    @classmethod
    def from_options(cls, options: Any) -> TaskRegistry:
        tasks, _ = split_options(options)
        return cls(tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def get_task_by_name(self, name: str) -> Task | None:
        try:
            return self._by_name.get(name)
        except TypeError:
            # unhashable lookup key
            return None

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)
