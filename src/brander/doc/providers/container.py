"""Provider grouping nested ``sections`` under a single, optionally titled, node."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...errors import ConfigurationError
from ...logging_utils import get_logger
from ...utils import pluralize
from ..document_context import DocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ..document_context_parser import DocumentContextParser
    from ..document_context_runner import DocumentContextRunner

logger = get_logger("doc", "container")


class ContainerDocumentProvider(DocumentProvider):
    def get_type(self) -> str:
        return "container"

    def create_context(
        self,
        data: dict[str, Any],
        parent: DocumentContext | None,
        parser: DocumentContextParser,
    ) -> DocumentContext:
        context = super().create_context(data, parent, parser)
        sections = context.get("sections") or []
        if not isinstance(sections, list):
            raise ConfigurationError(f'"sections" configuration must be an array: {sections!r}')

        logger.debug("%d %s found for %s document", len(sections), pluralize("child", len(sections)), self.get_type())
        if sections:
            context.adopt(parser.nested(sections, context).parse_remaining())
        return context

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        context.config.logger.info("Rendering %s document...", self.get_type())
        results = runner.render_children(context.children)
        return context.config.line_separator.join(result for result in results if result)
