"""Providers rendering Markdown tables."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...color import Color
from ...errors import ConfigurationError
from ...logging_utils import get_logger
from ...markdown import create_table
from ...utils import pluralize
from ..document_context import DocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ..document_context_runner import DocumentContextRunner

logger = get_logger("doc", "table")


def get_array(context: DocumentContext, name: str, required: bool = False) -> list[Any]:
    value = context.get(name)
    if not value:
        if required:
            raise ConfigurationError(f'"{name}" configuration is required')
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f'"{name}" configuration must be an array')
    return value


class TableDocumentProvider(DocumentProvider):
    """Renders the literal ``headers`` and ``rows`` it is configured with."""

    def get_type(self) -> str:
        return "table"

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        config = context.config
        config.logger.info("Rendering %s document...", self.get_type())

        headers = get_array(context, "headers")
        rows = get_array(context, "rows", required=True)
        for index, row in enumerate(rows):
            if not isinstance(row, list):
                raise ConfigurationError(f'"rows[{index}]" configuration must be an array')

        logger.debug(
            "Rendering %d %s and %d %s for %s document",
            len(headers),
            pluralize("header", len(headers)),
            len(rows),
            pluralize("row", len(rows)),
            self.get_type(),
        )
        return create_table(headers, rows, config.line_separator)


class ColorTableDocumentProvider(DocumentProvider):
    """Renders one row per entry of ``colors``.

    Each of ``columns`` has a ``header`` and a ``content`` expression evaluated with ``color``
    bound to a :class:`~brander.color.Color`.
    """

    def get_type(self) -> str:
        return "color-table"

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        config = context.config
        config.logger.info("Rendering %s document...", self.get_type())

        colors = [Color(color) for color in get_array(context, "colors", required=True)]
        columns = get_array(context, "columns", required=True)
        for index, column in enumerate(columns):
            if not isinstance(column, dict) or not isinstance(column.get("content"), str):
                raise ConfigurationError(f'"columns[{index}].content" configuration is required')

        headers = [column.get("header", "") for column in columns]
        rows = [[config.evaluate(column["content"], color=color) for column in columns] for color in colors]

        logger.debug(
            "Rendering %d %s and %d %s for %s document",
            len(headers),
            pluralize("header", len(headers)),
            len(rows),
            pluralize("row", len(rows)),
            self.get_type(),
        )
        return create_table(headers, rows, config.line_separator)
