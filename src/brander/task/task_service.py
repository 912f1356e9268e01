"""Registry mapping task types to the tasks able to perform them."""
from __future__ import annotations

from ..logging_utils import get_logger
from ..utils import load_builtin
from .task import Task
from .task_type import TaskType

logger = get_logger("task")

BUILTIN_TASKS: tuple[str, ...] = (
    "brander.task.clean:CleanAnyTask",
    "brander.task.convert:ConvertSvgToPngTask",
    "brander.task.convert:ConvertSvgToJpegTask",
    "brander.task.convert:ConvertSvgToIcoTask",
    "brander.task.convert:ConvertPngToIcoTask",
    "brander.task.optimize:OptimizeSvgTask",
    "brander.task.package:PackageAnyToZipTask",
    "brander.task.package:PackagePngToIcoTask",
    "brander.task.package:PackageSvgToIcoTask",
)


class TaskService:
    """Holds the tasks available to a run, keyed by type and kept in registration order.

    Built-in tasks are registered on first use. Calling :meth:`clear` removes every task and
    also stops built-ins from being registered later; callers that clear are expected to add
    their own tasks.
    """

    def __init__(self, builtins: tuple[str, ...] = BUILTIN_TASKS) -> None:
        self._builtins = builtins
        self._builtins_added = False
        self._types: dict[TaskType, list[Task]] = {}

    def add(self, task: Task) -> None:
        self._add_builtins()
        logger.debug("Adding task: %r", task)
        self._add(task)

    def clear(self) -> None:
        self._builtins_added = True
        logger.debug("Removing all tasks")
        self._types.clear()

    def find_by_type(self, task_type: TaskType) -> list[Task]:
        if not isinstance(task_type, TaskType):
            raise TypeError(f"type is not a TaskType: {task_type!r}")
        self._add_builtins()
        return list(self._types.get(task_type, []))

    def get_all(self) -> list[Task]:
        self._add_builtins()
        return [task for tasks in self._types.values() for task in tasks]

    def remove(self, task: Task) -> None:
        self._add_builtins()
        logger.debug("Removing task: %r", task)
        tasks = self._types.get(self._type_of(task), [])
        if task in tasks:
            tasks.remove(task)

    def remove_by_type(self, task_type: TaskType) -> None:
        if not isinstance(task_type, TaskType):
            raise TypeError(f"type is not a TaskType: {task_type!r}")
        self._add_builtins()
        logger.debug("Removing all tasks for type: %s", task_type)
        self._types.pop(task_type, None)

    def _add(self, task: Task) -> None:
        tasks = self._types.setdefault(self._type_of(task), [])
        if task not in tasks:
            tasks.append(task)

    def _add_builtins(self) -> None:
        if self._builtins_added:
            return
        self._builtins_added = True

        for reference in self._builtins:
            task = load_builtin(reference, Task)
            logger.debug("Adding internal task: %r", task)
            self._add(task)

    @staticmethod
    def _type_of(task: Task) -> TaskType:
        task_type = task.get_type()
        if not isinstance(task_type, TaskType):
            raise TypeError(f"{type(task).__name__}.get_type did not return a TaskType")
        return task_type
