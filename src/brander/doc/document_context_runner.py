"""Renders document contexts with the providers registered for their type."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from ..config.context_parser import ContextParser
from ..config.context_runner import ContextRunner
from ..errors import DispatchError
from ..logging_utils import get_logger
from .document_context import DocumentContext
from .document_provider import DocumentProvider
from .document_service import DocumentService

if TYPE_CHECKING:
    from ..config.config import Config

logger = get_logger("doc")


class DocumentContextRunner(ContextRunner[DocumentContext]):
    """Renders each context to its heading followed by its body.

    Providers of nested documents call back into :meth:`render_children`, which renders within
    the current run instead of starting a new one.
    """

    def __init__(
        self,
        contexts_or_parser: Sequence[DocumentContext] | ContextParser[DocumentContext],
        config: Config,
        service: DocumentService,
    ) -> None:
        super().__init__(contexts_or_parser, config)
        self.service = service

    def run_before(self, config: Config) -> None:
        for provider in self.service.get_all():
            provider.before_all(config)

    def run_after(self, config: Config) -> None:
        for provider in self.service.get_all():
            try:
                provider.after_all(config)
            except Exception as exc:  # noqa: BLE001
                config.logger.warning("DocumentProvider.after_all failed for %r provider: %s", provider, exc)

    def find_provider(self, context: DocumentContext) -> DocumentProvider:
        provider = self.service.find_by_type(context.type)
        if provider is None:
            raise DispatchError("doc", context.type, "has no associated provider")
        if not provider.supports(context):
            raise DispatchError("doc", context.type, "has no supporting provider")
        return provider

    def render_children(self, contexts: Iterable[DocumentContext]) -> list[str]:
        return [self.run_context(context) for context in contexts]

    def run_context(self, context: DocumentContext) -> str:
        provider = self.find_provider(context)
        logger.debug("Rendering %s document with provider: %r", context.type, provider)

        provider.before(context)
        try:
            title = provider.render_title(context)
            output = [title] if title else []
            result = provider.render(context, self)
            if result:
                output.extend((result, ""))
        finally:
            provider.after(context)

        return context.config.line_separator.join(output)
