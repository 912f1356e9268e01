"""Small helpers for reading loosely-typed configuration data."""
from __future__ import annotations

import importlib
from collections.abc import Mapping, Sequence
from typing import Any

_MISSING = object()


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Read a dotted ``path`` (e.g. ``"assets.dir"`` or ``"rows.0"``) from nested mappings and lists."""
    if data is None or not path:
        return default

    current = data
    for key in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(key, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)) and key.isdigit():
            index = int(key)
            current = current[index] if index < len(current) else _MISSING
        else:
            current = getattr(current, key, _MISSING)
        if current is _MISSING:
            return default
    return default if current is None else current


def trim(value: Any) -> str:
    """Return ``value`` as a stripped string, treating ``None`` as empty."""
    if value is None:
        return ""
    return str(value).strip()


def cast_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    if isinstance(value, tuple):
        return list(value)
    return [value]


def pluralize(word: str, count: int) -> str:
    if count == 1:
        return word
    if word.endswith("ch") or word.endswith("s"):
        return f"{word}es"
    if word == "child":
        return "children"
    return f"{word}s"


def load_builtin(reference: str, base: type) -> Any:
    """Import ``module:Class``, instantiate it and check that the result is a ``base``."""
    module_name, _, attribute = reference.partition(":")
    factory = getattr(importlib.import_module(module_name), attribute, None)
    instance = factory() if callable(factory) else None
    if not isinstance(instance, base):
        raise TypeError(f"Built-in reference is not a {base.__name__} implementation: {reference}")
    return instance
