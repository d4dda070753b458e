# src/task_list/tasks/completion.py

from __future__ import annotations

"""
Completion adapter.

Task operations come in three flavours:
- plain call that returns a value (done immediately),
- plain call that returns an awaitable (done when it settles),
- call that takes an error-first `done(err=None)` handle (done when called).

invoke() hides the difference: it returns a future that resolves to the raw
error reported by the operation, or None on success. The sequencer never
branches on the style.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def required_positional_args(fn: Callable[..., Any]) -> int | None:
    """
    Number of positional parameters `fn` requires, or None if it cannot be
    inspected (some builtins). *args does not count.
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    return sum(
        1
        for p in sig.parameters.values()
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


def takes_callback(fn: Callable[..., Any]) -> bool:
    return required_positional_args(fn) == 1


def invoke(operation: Callable[..., Any], *, label: str = "") -> asyncio.Future[Any]:
    """
    Schedule `operation` on the next loop tick and return a future that
    resolves to the reported error (None on success).

    The future itself never carries an exception for task failures, including
    an operation that cancels itself. Cancelling the returned future cancels
    the awaitable the operation is running, if any.
    """
    loop = asyncio.get_running_loop()
    result: asyncio.Future[Any] = loop.create_future()
    callback_style = takes_callback(operation)

    def _settle(err: Any) -> None:
        if result.cancelled():
            return
        if result.done():
            logger.warning("Completion reported more than once for %s; ignoring", label or operation)
            return
        result.set_result(err)

    def _done(err: Any = None) -> None:
        # Error-first handle; safe to call from any thread. Falsy err is success.
        if loop.is_closed():
            logger.warning("Completion for %s arrived after the loop closed", label or operation)
            return
        loop.call_soon_threadsafe(_settle, err if err else None)

    def _on_awaited(fut: asyncio.Future[Any]) -> None:
        if result.cancelled():
            # The pass was cancelled; nothing is waiting for this outcome.
            return
        if fut.cancelled():
            # The operation cancelled itself: that is this task's failure.
            _done(asyncio.CancelledError())
            return
        exc = fut.exception()
        if exc is not None:
            _done(exc)
        elif not callback_style:
            _done(None)

    def _run() -> None:
        if result.done():
            # Cancelled before our turn came.
            return
        try:
            returned = operation(_done) if callback_style else operation()
        except (Exception, asyncio.CancelledError) as exc:
            _done(exc)
            return

        if inspect.isawaitable(returned):
            awaited = asyncio.ensure_future(returned)
            awaited.add_done_callback(_on_awaited)
            # Cancelling the pass cancels the operation in flight.
            result.add_done_callback(lambda f: awaited.cancel() if f.cancelled() else None)
        elif not callback_style:
            _done(None)

    loop.call_soon(_run)
    return result
