"""Capability tags for asset generation tasks."""
from __future__ import annotations

from enum import Enum

from ..errors import ConfigurationError
from ..utils import trim


class TaskType(Enum):
    """The kind of work a task performs; ``output_required`` types need an ``output`` configuration."""

    CLEAN = ("clean", False)
    CONVERT = ("convert", True)
    OPTIMIZE = ("optimize", False)
    PACKAGE = ("package", True)

    def __init__(self, type_name: str, output_required: bool) -> None:
        self.type_name = type_name
        self.output_required = output_required

    @classmethod
    def value_of(cls, name: str) -> TaskType:
        normalized = trim(name).lower()
        for task_type in cls:
            if task_type.type_name == normalized:
                return task_type
        raise ConfigurationError(f'No TaskType found for name: "{normalized}"')

    def __str__(self) -> str:
        return self.type_name
