"""Logging helpers for Brander."""
from __future__ import annotations

import logging
from typing import Literal

from rich.logging import RichHandler

LOGGER_NAME = "brander"


def configure_logging(level: str | Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO") -> None:
    """Configure root logging with Rich formatting."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, markup=False, show_path=False)],
        force=True,
    )


def get_logger(*names: str) -> logging.Logger:
    """Return the Brander logger, optionally namespaced (e.g. ``get_logger("task", "convert")``)."""
    return logging.getLogger(".".join((LOGGER_NAME, *names)))
