"""Sequential execution of parsed contexts."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .context import Context
from .context_parser import ContextParser

if TYPE_CHECKING:
    from .config import Config

ContextT = TypeVar("ContextT", bound=Context)


@dataclass(frozen=True, slots=True)
class RanEvent(Generic[ContextT]):
    context: ContextT
    result: Any


class ContextRunner(ABC, Generic[ContextT]):
    """Runs contexts one at a time, in the order they were given or parsed.

    Contexts may be supplied up front or pulled lazily from a :class:`ContextParser`, one batch at a
    time, so that each batch is only parsed once the previous one has finished running.
    """

    def __init__(self, contexts_or_parser: Sequence[ContextT] | ContextParser[ContextT], config: Config) -> None:
        self._contexts_or_parser = contexts_or_parser
        self._config = config
        self._listeners: list[Callable[[RanEvent[ContextT]], None]] = []

    def on_ran(self, listener: Callable[[RanEvent[ContextT]], None]) -> None:
        """Register ``listener`` to be notified after each context has run successfully."""
        self._listeners.append(listener)

    def run(self) -> list[Any]:
        results: list[Any] = []
        try:
            self.run_before(self._config)
            for context in self._iter_contexts():
                result = self.run_context(context)
                for listener in self._listeners:
                    listener(RanEvent(context=context, result=result))
                results.append(result)
        finally:
            self.run_after(self._config)
        return results

    def run_before(self, config: Config) -> None:
        """Hook invoked once before the first context is run."""

    def run_after(self, config: Config) -> None:
        """Hook invoked once after the run, whether or not it succeeded."""

    @abstractmethod
    def run_context(self, context: ContextT) -> Any:
        """Run a single context, returning its result."""

    def _iter_contexts(self) -> Iterator[ContextT]:
        source = self._contexts_or_parser
        if isinstance(source, ContextParser):
            while (contexts := source.parse_next()) is not None:
                yield from contexts
        else:
            yield from list(source)

    @property
    def config(self) -> Config:
        return self._config
