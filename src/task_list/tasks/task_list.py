# src/task_list/tasks/task_list.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from ..config import Settings, get_settings
from ..core.ports import CompletionCallback, TaskLogger, resolve_task_logger
from ..errors import TaskStartError, TaskStopError
from . import task_sequencer
from .task_models import Task
from .task_registry import TaskRegistry, split_options

logger = logging.getLogger(__name__)


class TaskList:
    """
    Public entry point: an ordered list of tasks that can be started and
    stopped as a unit.

    start_all()/stop_all() must be called while an asyncio loop is running.
    Without a callback they return an asyncio.Task to await; with a callback
    they return None and call callback(err) once the pass is over.

    Example:
        tasks = TaskList([
            {"name": "db", "type": "service", "start": db.connect, "stop": db.close},
            {"name": "http", "type": "service", "start": server.start, "stop": server.stop},
        ])
        await tasks.start_all()
        ...
        await tasks.stop_all()
    """

    def __init__(self, options: Any, *, settings: Settings | None = None) -> None:
        descriptors, raw_logger = split_options(options)
        self._registry = TaskRegistry(descriptors)

        default_enabled = False
        if raw_logger is None:
            settings = settings or get_settings()
            default_enabled = settings.default_logger
        self.logger: TaskLogger = resolve_task_logger(raw_logger, default_enabled=default_enabled)

        # Keep references to in-flight passes started in callback mode.
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def registry(self) -> TaskRegistry:
        return self._registry

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._registry.tasks

    def get_task_by_name(self, name: str) -> Task | None:
        return self._registry.get_task_by_name(name)

    def start_all(self, callback: CompletionCallback | None = None) -> asyncio.Task[None] | None:
        return self._submit(
            task_sequencer.start_all(self._registry, self.logger), callback, name="task-list.start_all"
        )

    def stop_all(self, callback: CompletionCallback | None = None) -> asyncio.Task[None] | None:
        return self._submit(
            task_sequencer.stop_all(self._registry, self.logger), callback, name="task-list.stop_all"
        )

    def _submit(
        self,
        coro: Coroutine[Any, Any, None],
        callback: CompletionCallback | None,
        *,
        name: str,
    ) -> asyncio.Task[None] | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise RuntimeError(f"{name} must be called from a running asyncio event loop") from None

        pass_task = loop.create_task(coro, name=name)
        if callback is None:
            return pass_task

        self._pending.add(pass_task)

        def _finished(t: asyncio.Task[None]) -> None:
            self._pending.discard(t)
            if t.cancelled():
                err: BaseException | None = asyncio.CancelledError()
            else:
                err = t.exception()
            try:
                callback(err)
            except Exception:
                logger.exception("%s completion callback raised", name)

        pass_task.add_done_callback(_finished)
        return None

    async def __aenter__(self) -> TaskList:
        try:
            await self.start_all()
        except TaskStartError:
            # Undo whatever did start before surfacing the failure.
            try:
                await self.stop_all()
            except TaskStopError:
                logger.exception("Stopping after a failed start also failed")
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop_all()


def create(options: Any, *, settings: Settings | None = None) -> TaskList:
    """Build a TaskList from a list of descriptors or a {"tasks", "logger"} config."""
    return TaskList(options, settings=settings)
