"""Registry mapping document types to their providers."""
from __future__ import annotations

from ..logging_utils import get_logger
from ..utils import load_builtin, trim
from .document_provider import DocumentProvider

logger = get_logger("doc")

BUILTIN_PROVIDERS: tuple[str, ...] = (
    "brander.doc.providers.asset_feature:AssetFeatureDocumentProvider",
    "brander.doc.providers.container:ContainerDocumentProvider",
    "brander.doc.providers.hr:HorizontalRuleDocumentProvider",
    "brander.doc.providers.root:RootDocumentProvider",
    "brander.doc.providers.table:ColorTableDocumentProvider",
    "brander.doc.providers.table:TableDocumentProvider",
    "brander.doc.providers.template:TemplateDocumentProvider",
    "brander.doc.providers.toc:TableOfContentsDocumentProvider",
)


def normalize_type(name: object) -> str:
    return trim(name).lower()


class DocumentService:
    """Holds one provider per document type.

    Adding a provider for a type that is already registered replaces the existing provider. As
    with :class:`~brander.task.TaskService`, built-ins are registered on first use unless
    :meth:`clear` has been called.
    """

    def __init__(self, builtins: tuple[str, ...] = BUILTIN_PROVIDERS) -> None:
        self._builtins = builtins
        self._builtins_added = False
        self._providers: dict[str, DocumentProvider] = {}

    def add(self, provider: DocumentProvider) -> None:
        self._add_builtins()
        logger.debug("Adding document provider: %r", provider)
        self._add(provider)

    def clear(self) -> None:
        self._builtins_added = True
        logger.debug("Removing all document providers")
        self._providers.clear()

    def find_by_type(self, name: str) -> DocumentProvider | None:
        self._add_builtins()
        return self._providers.get(normalize_type(name))

    def get_all(self) -> list[DocumentProvider]:
        self._add_builtins()
        return list(self._providers.values())

    def remove(self, provider: DocumentProvider) -> None:
        self._add_builtins()
        name = self._type_of(provider)
        if self._providers.get(name) is provider:
            logger.debug("Removing document provider: %r", provider)
            del self._providers[name]

    def remove_by_type(self, name: str) -> None:
        self._add_builtins()
        logger.debug("Removing document provider for type: %s", name)
        self._providers.pop(normalize_type(name), None)

    def _add(self, provider: DocumentProvider) -> None:
        self._providers[self._type_of(provider)] = provider

    def _add_builtins(self) -> None:
        if self._builtins_added:
            return
        self._builtins_added = True

        for reference in self._builtins:
            provider = load_builtin(reference, DocumentProvider)
            logger.debug("Adding internal document provider: %r", provider)
            self._add(provider)

    @staticmethod
    def _type_of(provider: DocumentProvider) -> str:
        name = provider.get_type()
        if not isinstance(name, str) or not name.strip():
            raise TypeError(f"{type(provider).__name__}.get_type did not return a document type")
        return normalize_type(name)
