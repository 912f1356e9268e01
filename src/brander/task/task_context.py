"""Context describing one executable unit of asset generation."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ..config.context import Context
from ..errors import ConfigurationError
from ..utils import get_path
from .task_type import TaskType

if TYPE_CHECKING:
    from ..config.config import Config
    from ..file import File


class TaskContext(Context):
    """A group of input files sharing one format, the optional output and the task options.

    The options bag belongs to this context alone; parsers hand each context its own deep copy.
    """

    __slots__ = ("_type", "_input_files", "_output_file", "_options")

    def __init__(
        self,
        type: TaskType,
        input_files: Sequence[File],
        output_file: File | None,
        options: dict[str, Any],
        config: Config,
    ) -> None:
        super().__init__(config)

        if not input_files:
            raise ConfigurationError(f'"{type}" task requires at least one input file')
        formats = {file.format for file in input_files}
        if len(formats) != 1:
            raise ConfigurationError(f'"{type}" task input files must share a single format: {sorted(map(str, formats))}')
        if output_file is None and type.output_required:
            raise ConfigurationError(f'"output" configuration is required for "{type}" tasks')

        self._type = type
        self._input_files = tuple(input_files)
        self._output_file = output_file
        self._options = options

    def option(self, name: str, default: Any = None) -> Any:
        return get_path(self._options, name, default)

    @property
    def input_files(self) -> list[File]:
        return list(self._input_files)

    @property
    def input_format(self) -> str | None:
        return self._input_files[0].format

    @property
    def options(self) -> dict[str, Any]:
        return self._options

    @property
    def output_file(self) -> File | None:
        return self._output_file

    @property
    def type(self) -> TaskType:
        return self._type

    def __repr__(self) -> str:
        names = ", ".join(file.name or "?" for file in self._input_files)
        return f"TaskContext({self._type}, inputs=[{names}], output={self._output_file!r})"
