"""Provider for documents written to their own Markdown file."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...errors import ConfigurationError
from ...file import File
from ...logging_utils import get_logger
from ...markdown import create_horizontal_rule, create_link
from ...utils import pluralize, trim
from ..document_context import DocumentContext, RootDocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ...config.config import Config
    from ..document_context_parser import DocumentContextParser
    from ..document_context_runner import DocumentContextRunner

logger = get_logger("doc", "root")

MARKDOWN_FORMATS = ("md", "markdown")


def default_footer(config: Config) -> dict[str, Any] | None:
    if config.option("docs.disableDefaultFooter"):
        return None
    link = create_link("Brander", "https://github.com/neocotic/brander")
    return {"type": "template", "content": f"{create_horizontal_rule()}{{{{ eol * 2 }}}}Generated by {link}"}


class RootDocumentProvider(DocumentProvider):
    """Writes its ``sections`` to the Markdown file named by ``doc``.

    ``options.docs.header`` and ``options.docs.footer`` are added as the first and last sections
    of every root document.
    """

    def get_type(self) -> str:
        return "root"

    def create_context(
        self,
        data: dict[str, Any],
        parent: DocumentContext | None,
        parser: DocumentContextParser,
    ) -> DocumentContext:
        config = parser.config
        type_name = self.get_type()
        if parent is not None:
            raise ConfigurationError(f'"{type_name}" document cannot have parent')

        file_name = trim(data.get("doc"))
        if not file_name:
            raise ConfigurationError('"doc" configuration is required')
        file_format = File.derive_format(file_name, data.get("format"))
        if file_format not in MARKDOWN_FORMATS:
            raise ConfigurationError(f'"format" configuration unsupported: {file_format}')

        dir_path = config.resolve(trim(data.get("dir")) or config.docs_dir)
        file = File(dir_path, file_name, file_format, config).evaluate()
        context = RootDocumentContext(type_name, file, data, config)
        logger.debug("Creating context for %s document: %s", type_name, file.name)

        sections = list(context.get("sections") or [])
        header = config.option("docs.header")
        footer = config.option("docs.footer") or default_footer(config)
        if header:
            logger.debug("Header will be applied to %s document: %s", type_name, file.name)
            sections.insert(0, header)
        if footer:
            logger.debug("Footer will be applied to %s document: %s", type_name, file.name)
            sections.append(footer)

        logger.debug(
            "%d %s found for %s document: %s", len(sections), pluralize("child", len(sections)), type_name, file.name
        )
        if sections:
            context.adopt(parser.nested(sections, context).parse_remaining())
        return context

    def render_title(self, context: DocumentContext) -> str:
        # The title is written into the file rather than returned alongside it.
        return ""

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        if not isinstance(context, RootDocumentContext):
            raise TypeError(f"{self.get_type()} documents require a root context: {context!r}")
        config = context.config
        file = context.file
        config.logger.info("Rendering %s document file: %s", self.get_type(), file.relative)

        title = super().render_title(context)
        output = [title] if title else []
        output.extend(result for result in runner.render_children(context.children) if result)

        content = config.line_separator.join(output)
        config.logger.info("Writing rendered output to %s document file: %s", self.get_type(), file.relative)
        File.write_file(file.absolute, content)
        return content
