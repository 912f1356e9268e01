"""Provider rendering a numbered table of contents for one or more root documents."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ...errors import ConfigurationError
from ...logging_utils import get_logger
from ...markdown import create_link
from ...utils import cast_list, pluralize, trim
from ..document_context import DocumentContext, RootDocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ..document_context_runner import DocumentContextRunner

logger = get_logger("doc", "toc")

INDENT = "    "


def _depth_option(context: DocumentContext, name: str, default: int) -> int:
    value = context.get(name, default)
    if isinstance(value, bool):
        raise ConfigurationError(f'"{name}" configuration must be an integer: {value!r}')
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f'"{name}" configuration must be an integer: {value!r}') from exc


class TableOfContentsDocumentProvider(DocumentProvider):
    """Lists the titled documents within root documents as nested, numbered links.

    ``docs`` names root documents by file name and may point at documents of other trees, which
    are looked up in the scope. Without it, the root containing this document is listed.
    Contexts shallower than ``minDepth`` are skipped but their children are still considered;
    contexts deeper than ``maxDepth`` (unless it is -1) are left out entirely.
    """

    def get_type(self) -> str:
        return "toc"

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        config = context.config
        config.logger.info("Rendering %s document...", self.get_type())

        min_depth = _depth_option(context, "minDepth", 1)
        max_depth = _depth_option(context, "maxDepth", -1)
        output: list[str] = []
        title_counts: dict[str, int] = {}

        for index, root in enumerate(self.find_roots(context)):
            logger.debug("Diving into %s document: %s", root.type, root.file.name)
            output.extend(self._render_at_depth(root, [root], 0, index, min_depth, max_depth, title_counts))

        return config.line_separator.join(output)

    def find_roots(self, context: DocumentContext) -> list[RootDocumentContext]:
        docs = context.get("docs")
        if not docs:
            root = context.root
            if root is None:
                raise ConfigurationError('"docs" configuration is required outside of a root document')
            return [root]

        roots: dict[str, RootDocumentContext] = {}
        for available in context.config.scope.docs:
            if isinstance(available, RootDocumentContext):
                roots[available.file.base()] = available
        logger.debug("%d root %s found in configuration", len(roots), pluralize("document", len(roots)))

        found: list[RootDocumentContext] = []
        for index, doc in enumerate(cast_list(docs)):
            root = roots.get(trim(doc))
            if root is None:
                raise ConfigurationError(f"Unable to find root document[{index}]: {trim(doc)}")
            found.append(root)
        return found

    def _render_at_depth(
        self,
        root: RootDocumentContext,
        contexts: Sequence[DocumentContext],
        depth: int,
        index: int,
        min_depth: int,
        max_depth: int,
        title_counts: dict[str, int],
    ) -> list[str]:
        output: list[str] = []
        for context in contexts:
            if context.depth < min_depth:
                output.extend(
                    self._render_at_depth(root, context.children, depth, 0, min_depth, max_depth, title_counts)
                )
            elif max_depth == -1 or context.depth <= max_depth:
                if context.title:
                    index += 1
                    output.append(self._render_row(root, context, depth, index, title_counts))
                else:
                    logger.debug("%s context has no title so excluding from %s document", context.type, self.get_type())
                output.extend(
                    self._render_at_depth(root, context.children, depth + 1, 0, min_depth, max_depth, title_counts)
                )
            else:
                logger.debug("Depth of %s context too high so ignoring: %d", context.type, context.depth)
        return output

    def _render_row(
        self,
        root: RootDocumentContext,
        context: DocumentContext,
        depth: int,
        index: int,
        title_counts: dict[str, int],
    ) -> str:
        title = context.title or ""
        fragment = None
        if not context.is_root():
            count = title_counts.get(title, 0) + 1
            title_counts[title] = count
            fragment = f"{title}-{count}" if count > 1 else title

        url = context.config.doc_url(root.file.relative, fragment)
        return f"{INDENT * depth}{index}. {create_link(title, url)}"
