"""Runs task contexts against the tasks registered for their type."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..config.context_parser import ContextParser
from ..config.context_runner import ContextRunner
from ..errors import DispatchError
from ..logging_utils import get_logger
from .task import Task
from .task_context import TaskContext
from .task_service import TaskService

if TYPE_CHECKING:
    from ..config.config import Config

logger = get_logger("task")


class TaskContextRunner(ContextRunner[TaskContext]):
    """Dispatches each context to the first registered task supporting it.

    Every registered task is given the chance to set up shared resources before the run and to
    release them afterwards, even when a task fails part way through.
    """

    def __init__(
        self,
        contexts_or_parser: Sequence[TaskContext] | ContextParser[TaskContext],
        config: Config,
        service: TaskService,
    ) -> None:
        super().__init__(contexts_or_parser, config)
        self.service = service

    def run_before(self, config: Config) -> None:
        for task in self.service.get_all():
            task.before_all(config)

    def run_after(self, config: Config) -> None:
        for task in self.service.get_all():
            try:
                task.after_all(config)
            except Exception as exc:  # noqa: BLE001
                config.logger.warning("Task.after_all failed for %r task: %s", task, exc)

    def find_task(self, context: TaskContext) -> Task:
        task_type = context.type
        logger.debug("Finding task for type: %s", task_type)

        tasks = self.service.find_by_type(task_type)
        if not tasks:
            raise DispatchError("task", str(task_type), "has no associated tasks")

        for task in tasks:
            if task.supports(context):
                return task
        raise DispatchError("task", str(task_type), "has no supporting tasks")

    def run_context(self, context: TaskContext) -> None:
        task = self.find_task(context)
        logger.debug("Executing task: %r", task)

        task.before(context)
        try:
            task.execute(context)
        finally:
            task.after(context)
