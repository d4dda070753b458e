# tests/test_completion.py

from __future__ import annotations

import asyncio
import logging
import threading

import pytest

from task_list.tasks.completion import invoke, required_positional_args, takes_callback


def test_arity_detection() -> None:
    def none():
        pass

    def one(cb):
        pass

    def one_with_default(cb, extra=1):
        pass

    def varargs(*args):
        pass

    class Service:
        def start(self, callback):
            pass

    assert required_positional_args(none) == 0
    assert required_positional_args(one) == 1
    assert required_positional_args(one_with_default) == 1
    assert required_positional_args(varargs) == 0
    assert takes_callback(Service().start)
    assert not takes_callback(none)


@pytest.mark.asyncio
async def test_plain_return_value_is_ignored() -> None:
    assert await invoke(lambda: "whatever") is None


@pytest.mark.asyncio
async def test_synchronous_exception_is_reported_as_error() -> None:
    def op():
        raise KeyError("k")

    err = await invoke(op)
    assert isinstance(err, KeyError)


@pytest.mark.asyncio
async def test_operation_runs_on_a_later_tick() -> None:
    calls: list[str] = []

    fut = invoke(lambda: calls.append("op"))
    calls.append("after invoke")
    await fut

    assert calls == ["after invoke", "op"]


@pytest.mark.asyncio
async def test_awaitable_result_is_awaited() -> None:
    finished = asyncio.Event()

    async def op():
        await asyncio.sleep(0.01)
        finished.set()

    assert await invoke(op) is None
    assert finished.is_set()


@pytest.mark.asyncio
async def test_returned_future_rejection_is_error() -> None:
    loop = asyncio.get_running_loop()

    def op():
        fut = loop.create_future()
        loop.call_later(0.01, fut.set_exception, ConnectionError("down"))
        return fut

    err = await invoke(op)
    assert isinstance(err, ConnectionError)


@pytest.mark.asyncio
async def test_callback_error_is_passed_through_unchanged() -> None:
    sentinel = object()

    err = await invoke(lambda cb: cb(sentinel))
    assert err is sentinel


@pytest.mark.asyncio
async def test_callback_waits_until_called() -> None:
    loop = asyncio.get_running_loop()

    def op(callback):
        loop.call_later(0.02, callback)

    fut = invoke(op)
    await asyncio.sleep(0)
    assert not fut.done()
    assert await fut is None


@pytest.mark.asyncio
async def test_second_callback_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    def op(callback):
        callback()
        callback(RuntimeError("late"))

    with caplog.at_level(logging.WARNING, logger="task_list.tasks.completion"):
        assert await invoke(op, label="twice") is None
        await asyncio.sleep(0)

    assert any("more than once" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_callback_from_another_thread() -> None:
    def op(callback):
        threading.Timer(0.01, callback).start()

    assert await asyncio.wait_for(invoke(op), timeout=1.0) is None


@pytest.mark.asyncio
async def test_async_callback_style_operation() -> None:
    async def op(callback):
        await asyncio.sleep(0)
        callback("failed late")

    assert await invoke(op) == "failed late"


@pytest.mark.asyncio
async def test_async_callback_style_operation_that_raises() -> None:
    async def op(callback):
        raise ValueError("before callback")

    err = await invoke(op)
    assert isinstance(err, ValueError)


@pytest.mark.asyncio
async def test_first_signal_wins_when_sync_callback_op_raises_after_success() -> None:
    def op(callback):
        callback()
        raise RuntimeError("after the fact")

    assert await invoke(op) is None


@pytest.mark.asyncio
async def test_self_cancelled_awaitable_is_reported_as_error() -> None:
    async def op():
        raise asyncio.CancelledError()

    err = await invoke(op)
    assert isinstance(err, asyncio.CancelledError)


@pytest.mark.asyncio
async def test_synchronous_cancelled_error_is_reported_as_error() -> None:
    def op():
        raise asyncio.CancelledError()

    err = await asyncio.wait_for(invoke(op), timeout=1.0)
    assert isinstance(err, asyncio.CancelledError)
