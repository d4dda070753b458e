# src/task_list/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root" for the command line:
- resolves a "package.module:attribute" target to task descriptors,
- wires settings and a stdlib notice logger into a TaskList.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from typing import Any

from ..config import Settings, get_settings
from ..core.ports import LoggingTaskLogger
from ..errors import TaskValidationError
from ..tasks.task_list import TaskList

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "tasks"


def load_target(target: str) -> Any:
    """
    Import `target` and return the referenced object.

    "pkg.mod:attr" -> pkg.mod.attr
    "pkg.mod"      -> pkg.mod.tasks
    A callable attribute is called with no arguments (a factory).
    """
    module_name, _, attr_path = target.partition(":")
    module_name = module_name.strip()
    if not module_name:
        raise TaskValidationError(f"Invalid target: {target!r} (expected 'module:attribute')")

    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as e:
        # ImportError, or whatever the module raises while importing
        raise TaskValidationError(f"Cannot import {module_name!r}: {e}") from e

    for part in (attr_path or DEFAULT_ATTRIBUTE).split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise TaskValidationError(f"{target!r} has no attribute {part!r}") from None

    if callable(obj) and not isinstance(obj, (list, tuple, Mapping)):
        try:
            obj = obj()
        except Exception as e:
            raise TaskValidationError(f"{target!r} factory failed: {e}") from e
    logger.debug("Loaded target %s -> %s", target, type(obj).__name__)
    return obj


def create_task_list(target: str, *, settings: Settings | None = None) -> TaskList:
    """
    Build a TaskList for the CLI.

    Notices always go to stdlib logging here, unless the target itself is a
    {"tasks", "logger"} config that brings its own logger.
    """
    if settings is None:
        settings = get_settings()

    loaded = load_target(target)
    if isinstance(loaded, TaskList):
        return loaded

    if isinstance(loaded, (list, tuple)):
        options: Any = {"tasks": loaded, "logger": LoggingTaskLogger()}
    elif isinstance(loaded, Mapping):
        options = dict(loaded)
        if options.get("logger") is None:
            options["logger"] = LoggingTaskLogger()
    else:
        options = loaded

    return TaskList(options, settings=settings)
