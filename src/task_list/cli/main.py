# src/task_list/cli/main.py

"""
CLI entrypoint.

    task-list check TARGET   validate and list the tasks
    task-list run TARGET     start all tasks, wait for SIGINT/SIGTERM, stop them

TARGET is "package.module:attribute" (attribute defaults to "tasks").
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ..cli.bootstrap import create_task_list
from ..config import Settings, get_settings
from ..errors import TaskListError, TaskStartError, TaskStopError
from ..logging_setup import setup_logging
from ..tasks.task_list import TaskList

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-list",
        description="Start and stop an ordered list of tasks.",
    )
    parser.add_argument("--log-level", default=None, help="console log level (default: settings)")
    parser.add_argument("--log-dir", default=None, help="also write a log file in this directory")

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="validate TARGET and list its tasks")
    check.add_argument("target", help="package.module[:attribute]")

    run = sub.add_parser("run", help="start all tasks, stop them on SIGINT/SIGTERM")
    run.add_argument("target", help="package.module[:attribute]")
    return parser


def _cmd_check(task_list: TaskList) -> int:
    for task in task_list.tasks:
        flag = " (disabled)" if task.is_statically_disabled else ""
        print(f"{task.name}\t{task.type.value}\t{task.state.value}{flag}")
    return EXIT_OK


async def _wait_for_signal() -> None:
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    def _handle_signal(sig: signal.Signals) -> None:
        logger.info("Signal %s received, stopping tasks...", sig.name)
        stop.set()

    installed: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _handle_signal, sig)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            # Windows / non-main thread: Ctrl+C still raises KeyboardInterrupt.
            logger.debug("Cannot install handler for %s", sig.name)

    try:
        await stop.wait()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


async def _cmd_run(task_list: TaskList) -> int:
    try:
        await task_list.start_all()
    except TaskStartError as e:
        logger.error("%s", e)
        try:
            await task_list.stop_all()
        except TaskStopError as stop_err:
            logger.error("%s", stop_err)
        return EXIT_FAILED

    logger.info("All tasks started. Press Ctrl+C to stop.")
    await _wait_for_signal()

    try:
        await task_list.stop_all()
    except TaskStopError as e:
        logger.error("%s", e)
        return EXIT_FAILED

    logger.info("Bye.")
    return EXIT_OK


def _effective_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    changes: dict[str, object] = {}
    if args.log_level:
        changes["log_level"] = str(args.log_level).upper()
    if args.log_dir:
        changes["log_dir"] = Path(args.log_dir).expanduser()
    return replace(settings, **changes) if changes else settings


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = _effective_settings(args, get_settings())

    console_level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(console_level, int):
        console_level = logging.INFO
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    try:
        task_list = create_task_list(args.target, settings=settings)
    except TaskListError as e:
        print(f"task-list: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.command == "check":
        return _cmd_check(task_list)

    logger.info("Starting %s (%d task(s))...", settings.app_name, len(task_list.tasks))
    try:
        return asyncio.run(_cmd_run(task_list))
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
