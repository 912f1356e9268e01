"""Brander package entry point and metadata."""
from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("brander")
except metadata.PackageNotFoundError:  # pragma: no cover - during local development
    __version__ = "0.4.1"

__all__ = ["__version__"]
