"""Evaluation of expressions embedded within configuration strings."""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from ..errors import ExpressionError

_environment = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


@lru_cache(maxsize=512)
def _compile(source: str) -> Template:
    return _environment.from_string(source)


class Expression:
    """A Jinja2 template string such as ``"{{ file.base(true) }}-{{ size }}.png"``."""

    def __init__(self, source: str) -> None:
        self.source = source
        try:
            self._template = _compile(source)
        except TemplateError as exc:
            raise ExpressionError(source, str(exc)) from exc

    def evaluate(self, data: dict[str, Any]) -> str:
        try:
            return self._template.render(**data)
        except TemplateError as exc:
            raise ExpressionError(self.source, str(exc)) from exc
