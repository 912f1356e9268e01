"""The run-wide configuration object shared by every parser, runner and handler."""
from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError
from ..logging_utils import get_logger
from ..utils import cast_list, get_path, trim
from .expression import Expression
from .models import ConfigData
from .package import Package
from .repository import GitRepository
from .scope import Scope

_LINE_SEPARATORS = {"crlf": "\r\n", "lf": "\n"}


class Config:
    """Wraps validated :class:`ConfigData` along with everything derived from where it was loaded.

    Paths in the configuration are resolved relative to the directory of the configuration file.
    """

    def __init__(
        self,
        data: ConfigData,
        file_path: str | os.PathLike[str],
        *,
        logger: logging.Logger | None = None,
        package: Package | None = None,
        repository: GitRepository | None = None,
    ) -> None:
        self._data = data
        self._file_path = Path(file_path).resolve()
        self._base_dir = self._file_path.parent
        self._logger = logger or get_logger()
        self._package = package or Package()
        self._repository = repository
        self._scope = Scope()

        repository_name = repository.name if repository else None
        repository_homepage = repository.homepage if repository else None
        self._email = trim(data.email) or None
        self._homepage = trim(data.homepage) or self._package.homepage or repository_homepage
        self._name = trim(data.name) or self._package.name or repository_name
        self._title = trim(data.title) or self._name
        line_separator = trim(self.option("lineSeparator")).lower()
        self._line_separator = _LINE_SEPARATORS.get(line_separator, os.linesep)

    # -- expressions and options --------------------------------------------

    def evaluate(self, expression: str, **variables: Any) -> str:
        """Evaluate ``expression`` with ``config`` and ``eol`` available alongside ``variables``."""
        data: dict[str, Any] = {"config": self, "eol": self._line_separator}
        data.update(variables)
        return Expression(expression).evaluate(data)

    def option(self, name: str, default: Any = None) -> Any:
        return get_path(self._data.options, name, default)

    # -- paths and URLs -----------------------------------------------------

    def resolve(self, *paths: str | os.PathLike[str]) -> Path:
        return self._base_dir.joinpath(*(str(path) for path in paths if path)).resolve()

    def relative(self, file_path: str | os.PathLike[str]) -> str:
        return Path(os.path.relpath(Path(file_path).resolve(), self._base_dir)).as_posix()

    def asset_path(self, *paths: str | os.PathLike[str]) -> Path:
        return self.resolve(self.assets_dir, *paths)

    def doc_path(self, *paths: str | os.PathLike[str]) -> Path:
        return self.resolve(self.docs_dir, *paths)

    def asset_url(self, paths: str | list[str]) -> str | None:
        file_path = _join_url_paths(paths)
        asset_url = self.option("assets.url")
        if asset_url:
            return self.evaluate(asset_url, file=file_path)
        return self._repository.raw_file_url(file_path) if self._repository else None

    def doc_url(self, paths: str | list[str], fragment: str | None = None) -> str | None:
        file_path = _join_url_paths(paths)
        doc_url = self.option("docs.url")
        if doc_url:
            return self.evaluate(doc_url, file=file_path, fragment=fragment)
        return self._repository.file_url(file_path, fragment) if self._repository else None

    # -- raw entries ----------------------------------------------------------

    @property
    def tasks(self) -> list[Any]:
        tasks = self._data.tasks
        if not isinstance(tasks, list):
            raise ConfigurationError('"tasks" configuration can only be an array')
        return copy.deepcopy(tasks)

    @property
    def docs(self) -> list[Any]:
        docs = self._data.docs
        if not isinstance(docs, list):
            raise ConfigurationError('"docs" configuration can only be an array')
        return copy.deepcopy(docs)

    # -- accessors ------------------------------------------------------------

    @property
    def assets_dir(self) -> str:
        return self.option("assets.dir", "assets")

    @property
    def docs_dir(self) -> str:
        return self.option("docs.dir", "docs")

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def data(self) -> ConfigData:
        return self._data

    @property
    def email(self) -> str | None:
        return self._email

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def homepage(self) -> str | None:
        return self._homepage

    @property
    def line_separator(self) -> str:
        return self._line_separator

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def package(self) -> Package:
        return self._package

    @property
    def repository(self) -> GitRepository | None:
        return self._repository

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def title(self) -> str | None:
        return self._title

    def __repr__(self) -> str:
        return f"Config({self._name})"


def _join_url_paths(paths: str | list[str]) -> str:
    file_path = "/".join(str(path).replace("\\", "/") for path in cast_list(paths))
    return file_path[1:] if file_path.startswith("/") else file_path
