"""Markdown documentation generated from document contexts."""

from .document_context import AssetFeatureDocumentContext, DocumentContext, RootDocumentContext
from .document_context_parser import DocumentContextParser
from .document_context_runner import DocumentContextRunner
from .document_provider import DocumentProvider
from .document_service import BUILTIN_PROVIDERS, DocumentService

__all__ = [
    "BUILTIN_PROVIDERS",
    "AssetFeatureDocumentContext",
    "DocumentContext",
    "DocumentContextParser",
    "DocumentContextRunner",
    "DocumentProvider",
    "DocumentService",
    "RootDocumentContext",
]
