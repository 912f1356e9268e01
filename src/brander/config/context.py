"""Base type for configured units of work."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config


class Context:
    """Binds one unit of configured work to the shared :class:`Config`.

    Configuration lookups always go through :attr:`config`; contexts never cache their own copy.
    """

    __slots__ = ("_config",)

    def __init__(self, config: Config) -> None:
        self._config = config

    @property
    def config(self) -> Config:
        return self._config
