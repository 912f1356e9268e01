"""Incremental translation of raw configuration entries into contexts."""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..logging_utils import get_logger
from .context import Context

if TYPE_CHECKING:
    from .config import Config

ContextT = TypeVar("ContextT", bound=Context)

logger = get_logger("config")


@dataclass(frozen=True, slots=True)
class ParsedEvent(Generic[ContextT]):
    contexts: list[ContextT]
    data: Any
    index: int


class ContextParser(ABC, Generic[ContextT]):
    """Parses one configuration entry at a time into zero or more contexts.

    :meth:`parse_next` must not be called again until the contexts it returned have been run, as
    later entries may depend on files written while running earlier ones.
    """

    def __init__(self, data_set: Sequence[Any], config: Config) -> None:
        self._data_set = list(data_set)
        self._config = config
        self._current_index = 0
        self._listeners: list[Callable[[ParsedEvent[ContextT]], None]] = []

    def on_parsed(self, listener: Callable[[ParsedEvent[ContextT]], None]) -> None:
        """Register ``listener`` to be notified with every batch of contexts once it has been parsed."""
        self._listeners.append(listener)

    def parse_next(self) -> list[ContextT] | None:
        """Parse the next entry, returning ``None`` once every entry has been parsed.

        An empty list is a valid result (e.g. no files matched) and does not indicate the end.
        """
        index = self._current_index
        if index >= len(self._data_set):
            logger.debug("No more data to be parsed")
            return None
        self._current_index += 1

        data = copy.deepcopy(self._data_set[index])
        if not data:
            logger.debug("No data found at index: %d", index)
            return []

        logger.debug("Creating contexts for data at index: %d", index)
        contexts = self.parse_data(data, index)

        event = ParsedEvent(contexts=list(contexts), data=data, index=index)
        for listener in self._listeners:
            listener(event)

        logger.debug("%d contexts created for data at index: %d", len(contexts), index)
        return contexts

    def parse_remaining(self) -> list[ContextT]:
        contexts: list[ContextT] = []
        while (batch := self.parse_next()) is not None:
            contexts.extend(batch)
        return contexts

    def reset(self) -> None:
        self._current_index = 0

    @abstractmethod
    def parse_data(self, data: Any, index: int) -> list[ContextT]:
        """Create the contexts described by a single configuration entry."""

    @property
    def config(self) -> Config:
        return self._config
