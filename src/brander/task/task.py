"""Base class for asset generation handlers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .task_type import TaskType

if TYPE_CHECKING:
    from ..config.config import Config
    from .task_context import TaskContext


class Task(ABC):
    """A handler for one :class:`TaskType`.

    Several tasks may share a type; the runner picks the first registered task whose
    :meth:`supports` accepts the context. ``supports`` must be cheap and free of side effects.
    """

    @abstractmethod
    def get_type(self) -> TaskType:
        """Return the capability tag this task is registered under."""

    @abstractmethod
    def supports(self, context: TaskContext) -> bool:
        """Return whether this task can handle the formats of ``context``."""

    @abstractmethod
    def execute(self, context: TaskContext) -> None:
        """Perform the task for ``context``."""

    def before_all(self, config: Config) -> None:
        """Acquire resources shared by every context of a run."""

    def after_all(self, config: Config) -> None:
        """Release resources acquired by :meth:`before_all`."""

    def before(self, context: TaskContext) -> None:
        pass

    def after(self, context: TaskContext) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_type()})"


def all_inputs_have_format(context: TaskContext, *formats: str) -> bool:
    return all(file.format in formats for file in context.input_files)


def output_has_format(context: TaskContext, *formats: str) -> bool:
    output_file = context.output_file
    return output_file is not None and output_file.format in formats
