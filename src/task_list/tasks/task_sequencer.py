# src/task_list/tasks/task_sequencer.py

from __future__ import annotations

"""
Task sequencer.

Two passes over a registry, both strictly sequential and in declaration order:

start_all:
- statically disabled tasks -> DISABLED, never invoked
- predicate-disabled tasks are checked when their turn comes
- each remaining task: start -> STARTED, or ERROR and the pass stops there

stop_all:
- only tasks that are STARTED and have a stop operation
- each one: stop -> STOPPED, or ERROR and the pass carries on
- all failures are reported together at the end

Each operation runs through the completion adapter, so sync functions,
coroutines and callback-style functions all look the same here.
"""

import logging
import traceback
from typing import Any

from ..core.ports import TaskLogger
from ..errors import TaskStartError, TaskStopError
from .completion import invoke
from .task_models import Failure, Task, TaskState
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def describe_error(err: Any) -> str:
    if isinstance(err, BaseException):
        return "".join(traceback.format_exception(err)).rstrip()
    return str(err)


async def _start_one(task: Task, notices: TaskLogger) -> Any:
    """Run one task's turn. Returns the raw error, or None."""
    notices.info(task.type.starting_message(task))
    if task.start is None:
        return None
    return await invoke(task.start, label=f"{task.name}.start")


async def start_all(registry: TaskRegistry, notices: TaskLogger) -> None:
    """
    Start every enabled task in order; stop at the first failure.

    Raises TaskStartError with a single Failure when a task fails to start.
    """
    failures: list[Failure] = []
    work: list[Task] = []

    for task in registry:
        if task.is_statically_disabled:
            task.state = TaskState.DISABLED
            notices.info(task.type.disabled_message(task))
            continue
        work.append(task)

    logger.debug("start pass: %d task(s) queued", len(work))

    for task in work:
        err: Any = None
        try:
            disabled = task.is_disabled()
        except Exception as exc:
            logger.debug("disabled check failed for %s", task.name, exc_info=True)
            disabled = False
            err = exc

        if disabled:
            task.state = TaskState.DISABLED
            notices.info(task.type.disabled_message(task))
            continue

        if err is None:
            err = await _start_one(task, notices)

        if err is not None:
            task.state = TaskState.ERROR
            notices.error(task.type.start_error_message(task))
            failures.append(Failure(task=task, err=err))
            break

        task.state = TaskState.STARTED
        notices.success(task.type.started_message(task))

    if failures:
        failed = failures[0]
        error = TaskStartError(failed.task.type.start_error_message(failed.task), failures=failures)
        if isinstance(failed.err, BaseException):
            raise error from failed.err
        raise error


async def stop_all(registry: TaskRegistry, notices: TaskLogger) -> None:
    """
    Stop every STARTED task in order, continuing past failures.

    Raises TaskStopError listing every task that failed to stop.
    """
    failures: list[Failure] = []
    work = [t for t in registry if t.stop is not None and t.state == TaskState.STARTED]

    logger.debug("stop pass: %d task(s) queued", len(work))

    for task in work:
        notices.info(task.type.stopping_message(task))
        err = await invoke(task.stop, label=f"{task.name}.stop")

        if err is not None:
            task.state = TaskState.ERROR
            notices.error(f'Failed to stop "{task.name}". Error: {describe_error(err)}')
            failures.append(Failure(task=task, err=err))
            continue

        task.state = TaskState.STOPPED
        notices.success(task.type.stopped_message(task))

    if failures:
        notices.error("Errors occurred while stopping tasks.")
        names = ", ".join(f.task.name for f in failures)
        error = TaskStopError(f"Following tasks failed to stop: {names}", failures=failures)
        first = failures[0].err
        if isinstance(first, BaseException):
            raise error from first
        raise error
