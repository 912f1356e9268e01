"""Base class for document renderers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..logging_utils import get_logger
from .document_context import DocumentContext

if TYPE_CHECKING:
    from ..config.config import Config
    from .document_context_parser import DocumentContextParser
    from .document_context_runner import DocumentContextRunner


class DocumentProvider(ABC):
    """Builds and renders the contexts of one document type.

    ``create_context`` receives the parser so that providers with nested configuration can parse
    it with :meth:`DocumentContextParser.nested`. ``render`` receives the runner so that they can
    render those children with :meth:`DocumentContextRunner.render_children`.
    """

    @abstractmethod
    def get_type(self) -> str:
        """Return the document type this provider renders."""

    @abstractmethod
    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str | None:
        """Return the Markdown body of ``context``, excluding its heading."""

    def create_context(
        self,
        data: dict[str, Any],
        parent: DocumentContext | None,
        parser: DocumentContextParser,
    ) -> DocumentContext:
        get_logger("doc", self.get_type()).debug("Creating context for %s document...", self.get_type())
        return DocumentContext(self.get_type(), data, parent, parser.config)

    def render_title(self, context: DocumentContext) -> str:
        """Return a Markdown heading for the title of ``context``, one level deeper than its parent's."""
        title = context.title
        if not title:
            return ""
        return f"{'#' * (context.depth + 1)} {title}{context.config.line_separator}"

    def supports(self, context: DocumentContext) -> bool:
        return context.type == self.get_type()

    def before_all(self, config: Config) -> None:
        pass

    def after_all(self, config: Config) -> None:
        pass

    def before(self, context: DocumentContext) -> None:
        pass

    def after(self, context: DocumentContext) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_type()})"
