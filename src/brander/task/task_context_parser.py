"""Parsing of task configuration entries into :class:`TaskContext` groups."""
from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from ..config.context_parser import ContextParser
from ..errors import ConfigurationError
from ..file import File
from ..logging_utils import get_logger
from ..size import Size
from ..utils import cast_list, trim
from .task_context import TaskContext
from .task_type import TaskType

logger = get_logger("task")


class TaskContextParser(ContextParser[TaskContext]):
    """Turns each task entry into one context per group of input files.

    All validation and globbing happens here, so configuration mistakes surface before any task
    for that entry runs. An entry whose patterns match no files produces no contexts.
    """

    def parse_data(self, data: Any, index: int) -> list[TaskContext]:
        if not isinstance(data, dict):
            raise ConfigurationError(f"task[{index}] configuration must be an object: {data!r}")

        input_files = self._build_input_files(data)
        options = self._parse_options(data)
        if not input_files:
            logger.debug("No input files found at task[%d]", index)
            return []

        type_name = trim(data.get("task"))
        if not type_name:
            raise ConfigurationError('"task" configuration is required')
        task_type = TaskType.value_of(type_name)

        logger.debug('Creating contexts for "%s" task[%d]...', task_type, index)

        group_by = options.get("groupBy")
        groups: dict[Any, list[File]] = {}
        for file in input_files:
            groups.setdefault(self._group_key(group_by, file), []).append(file)

        contexts: list[TaskContext] = []
        for group_name, group_files in groups.items():
            self._validate_single_format(group_name, group_files, grouped=group_by is not None)

            output_file = self._build_output_file(data)
            if output_file is None and task_type.output_required:
                raise ConfigurationError(f'"output" configuration is required for "{task_type}" tasks')

            contexts.append(TaskContext(task_type, group_files, output_file, copy.deepcopy(options), self.config))

        return contexts

    def _group_key(self, group_by: Any, file: File) -> Any:
        if group_by is None:
            return None
        if callable(group_by):
            return group_by(config=self.config, file=file)
        if isinstance(group_by, str):
            return self.config.evaluate(group_by, file=file)
        raise ConfigurationError(
            f'"options.groupBy" configuration can only be a string or a function: {group_by!r} ({type(group_by).__name__})'
        )

    def _build_input_files(self, data: dict[str, Any]) -> list[File]:
        config = self.config
        input_data = data.get("input")
        if not input_data:
            raise ConfigurationError('"input" configuration is required')
        if not isinstance(input_data, dict):
            raise ConfigurationError(f'"input" configuration must be an object: {input_data!r}')

        patterns = input_data.get("files")
        if not patterns:
            raise ConfigurationError('"input.files" configuration is required')
        if not isinstance(patterns, (str, list)):
            raise ConfigurationError(
                f'"input.files" configuration can only be a string or an array: {patterns!r} ({type(patterns).__name__})'
            )

        input_dir = trim(input_data.get("dir"))
        dir_path = config.resolve(config.assets_dir, config.evaluate(input_dir) if input_dir else "")
        input_files: list[File] = []

        for pattern in cast_list(patterns):
            if not isinstance(pattern, str):
                raise ConfigurationError(
                    f'"input.files" configuration can only contain strings: {pattern!r} ({type(pattern).__name__})'
                )
            pattern = pattern.strip()
            if not pattern:
                raise ConfigurationError('"input.files" configuration cannot contain null or empty patterns')

            pattern = config.evaluate(pattern).strip()
            if not pattern:
                raise ConfigurationError('"input.files" configuration cannot contain patterns that evaluate to empty')

            for file_path in File.find_files(pattern, cwd=dir_path):
                relative = Path(file_path)
                file_name = relative.name
                file_format = File.derive_format(file_name, input_data.get("format"))
                input_files.append(File((dir_path / relative.parent).resolve(), file_name, file_format, config, True))

        return input_files

    def _build_output_file(self, data: dict[str, Any]) -> File | None:
        config = self.config
        output_data = data.get("output")
        if not output_data:
            return None
        if not isinstance(output_data, dict):
            raise ConfigurationError(f'"output" configuration must be an object: {output_data!r}')

        file_name = output_data.get("files")
        if file_name is not None and not isinstance(file_name, str):
            raise ConfigurationError(
                f'"output.files" configuration can only be a string: {file_name!r} ({type(file_name).__name__})'
            )

        output_dir = trim(output_data.get("dir"))
        dir_path = str(config.resolve(config.assets_dir, output_dir)) if output_dir else None
        file_name = trim(file_name) or None
        file_format = File.derive_format(file_name, output_data.get("format"))
        if not (dir_path or file_name or file_format):
            return None
        return File(dir_path, file_name, file_format, config)

    def _parse_options(self, data: dict[str, Any]) -> dict[str, Any]:
        options = data.get("options") or {}
        if not isinstance(options, dict):
            raise ConfigurationError(f'"options" configuration must be an object: {options!r}')
        options = copy.deepcopy(options)

        sizes = options.get("sizes")
        if sizes is not None:
            if not isinstance(sizes, list):
                raise ConfigurationError(f'"options.sizes" configuration must be an array: {sizes!r}')
            options["sizes"] = [Size.parse(size) for size in sizes]
        return options

    def _validate_single_format(self, group: Any, files: list[File], *, grouped: bool) -> None:
        formats = {file.format for file in files}
        if len(formats) == 1:
            return

        message = '"input.files" configuration must map to a single format '
        if grouped:
            message += f'within resolved group: "{group}"'
        else:
            message += '- consider specifying the "options.groupBy" configuration'
        raise ConfigurationError(message)
