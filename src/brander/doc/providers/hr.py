from __future__ import annotations

from typing import TYPE_CHECKING

from ...markdown import create_horizontal_rule
from ..document_context import DocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ..document_context_runner import DocumentContextRunner


class HorizontalRuleDocumentProvider(DocumentProvider):
    def get_type(self) -> str:
        return "hr"

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        context.config.logger.info("Rendering %s document...", self.get_type())
        return create_horizontal_rule()
