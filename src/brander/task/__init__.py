"""Asset generation tasks and the machinery that parses and runs them."""

from .task import Task
from .task_context import TaskContext
from .task_context_parser import TaskContextParser
from .task_context_runner import TaskContextRunner
from .task_service import BUILTIN_TASKS, TaskService
from .task_type import TaskType

__all__ = [
    "BUILTIN_TASKS",
    "Task",
    "TaskContext",
    "TaskContextParser",
    "TaskContextRunner",
    "TaskService",
    "TaskType",
]
