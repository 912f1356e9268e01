from __future__ import annotations

from typing import TYPE_CHECKING

from ...errors import ConfigurationError
from ...file import File
from ...utils import trim
from ..document_context import DocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ..document_context_runner import DocumentContextRunner


class TemplateDocumentProvider(DocumentProvider):
    """Evaluates inline ``content`` (a string or a list of lines) or the contents of ``file``."""

    def get_type(self) -> str:
        return "template"

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        config = context.config
        config.logger.info("Rendering %s document...", self.get_type())

        content = context.data.get("content")
        file_name = trim(context.get("file"))
        if content is None and not file_name:
            raise ConfigurationError('"content" or "file" configuration is required')
        if content is not None and file_name:
            raise ConfigurationError('"content" or "file" configurations cannot both be specified')

        if file_name:
            file_path = config.resolve(file_name)
            config.logger.info("Reading %s document content from file: %s", self.get_type(), config.relative(file_path))
            content = File.read_text(file_path)
        elif isinstance(content, list):
            content = config.line_separator.join(str(line) for line in content)

        return config.evaluate(str(content))
