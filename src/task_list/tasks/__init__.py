# src/task_list/tasks/__init__.py

from .task_list import TaskList, create
from .task_models import Failure, Task, TaskState, TaskType
from .task_registry import TaskRegistry

__all__ = ["Failure", "Task", "TaskList", "TaskRegistry", "TaskState", "TaskType", "create"]
