# src/task_list/__init__.py

"""
task-list: start and stop an ordered list of tasks, one at a time.

    from task_list import create, TaskState

    tasks = create([{"name": "db", "start": db.connect, "stop": db.close}])
    await tasks.start_all()
"""

from .errors import TaskListError, TaskStartError, TaskStopError, TaskValidationError
from .tasks import Failure, Task, TaskList, TaskRegistry, TaskState, TaskType, create

__all__ = [
    "Failure",
    "Task",
    "TaskList",
    "TaskListError",
    "TaskRegistry",
    "TaskStartError",
    "TaskState",
    "TaskStopError",
    "TaskType",
    "TaskValidationError",
    "create",
]
