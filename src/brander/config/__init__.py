"""Configuration loading and the shared parse/run machinery."""
from .config import Config
from .context import Context
from .context_parser import ContextParser, ParsedEvent
from .context_runner import ContextRunner, RanEvent
from .loader import ConfigLoader
from .models import ConfigData, RepositoryInfo
from .scope import Scope

__all__ = [
    "Config",
    "ConfigData",
    "ConfigLoader",
    "Context",
    "ContextParser",
    "ContextRunner",
    "ParsedEvent",
    "RanEvent",
    "RepositoryInfo",
    "Scope",
]
