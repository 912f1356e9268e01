"""Parsing of document configuration entries into :class:`DocumentContext` trees."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ..config.context_parser import ContextParser
from ..errors import ConfigurationError, DispatchError
from ..logging_utils import get_logger
from .document_context import DocumentContext
from .document_service import DocumentService, normalize_type

if TYPE_CHECKING:
    from ..config.config import Config

logger = get_logger("doc")


class DocumentContextParser(ContextParser[DocumentContext]):
    """Turns each document entry into a single context, along with every context nested within it.

    The provider for the entry's ``type`` builds the node and any nested configuration of its
    own; generic ``children`` entries are then parsed beneath it.
    """

    def __init__(
        self,
        data_set: Sequence[Any],
        config: Config,
        service: DocumentService,
        default_type: str | None = None,
        parent: DocumentContext | None = None,
    ) -> None:
        super().__init__(data_set, config)
        self.service = service
        self.default_type = default_type
        self.parent = parent

    def nested(self, data_set: Sequence[Any], parent: DocumentContext, default_type: str | None = None) -> DocumentContextParser:
        """Return a parser for entries nested within ``parent``, sharing this parser's service."""
        return DocumentContextParser(data_set, self.config, self.service, default_type, parent)

    def parse_data(self, data: Any, index: int) -> list[DocumentContext]:
        if not isinstance(data, dict):
            raise ConfigurationError(f"doc[{index}] configuration must be an object: {data!r}")

        type_name = normalize_type(data.get("type")) or self.default_type
        if not type_name:
            raise ConfigurationError('"type" configuration is required')

        provider = self.service.find_by_type(type_name)
        if provider is None:
            raise DispatchError("doc", type_name, "has no associated provider")

        context = provider.create_context(data, self.parent, self)

        children = data.get("children")
        if children:
            if not isinstance(children, list):
                raise ConfigurationError(f'"children" configuration must be an array: {children!r}')
            logger.debug("Creating %d child contexts for %s document", len(children), type_name)
            context.adopt(self.nested(children, context).parse_remaining())

        return [context]
