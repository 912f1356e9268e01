"""Task removing previously generated files."""
from __future__ import annotations

from ..file import File
from ..logging_utils import get_logger
from .task import Task
from .task_context import TaskContext
from .task_type import TaskType

logger = get_logger("task", "clean")


class CleanAnyTask(Task):
    """Deletes every input file, whatever its format."""

    def get_type(self) -> TaskType:
        return TaskType.CLEAN

    def supports(self, context: TaskContext) -> bool:
        return True

    def execute(self, context: TaskContext) -> None:
        for input_file in context.input_files:
            input_path = input_file.absolute
            logger.debug("Removing file: %s", input_path)
            File.delete_file(input_path)
            context.config.logger.info("Cleaned file: %s", input_file.relative)
