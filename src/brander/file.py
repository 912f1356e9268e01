"""File descriptors and the filesystem helpers used by tasks and documents."""
from __future__ import annotations

import mimetypes
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .errors import ConfigurationError
from .utils import trim

if TYPE_CHECKING:
    from .config.config import Config


class File:
    """A partially or fully specified file: a directory, a name and a format.

    Any of the three may be missing until defaults are applied. Directory and name may hold
    expressions, which are evaluated against the owning :class:`Config` by :meth:`evaluate`.
    Instances are immutable; every transformation returns a new descriptor.
    """

    __slots__ = ("_dir", "_name", "_format", "_config", "_evaluated")

    def __init__(
        self,
        dir: str | os.PathLike[str] | None,
        name: str | None,
        format: str | None,
        config: Config,
        evaluated: bool = False,
    ) -> None:
        self._dir = str(dir) if dir else None
        self._name = name or None
        self._format = format or None
        self._config = config
        self._evaluated = evaluated

    # -- filesystem helpers -------------------------------------------------

    @staticmethod
    def derive_format(file_name: str | None, format: str | None = None) -> str | None:
        """Return the explicit ``format`` when given, otherwise the lower-cased extension of ``file_name``."""
        resolved = trim(format).lower()
        if not resolved and file_name:
            resolved = Path(file_name).suffix[1:].lower()
        return resolved or None

    @staticmethod
    def find_files(pattern: str, cwd: str | os.PathLike[str], directories: bool = False) -> list[str]:
        """Expand ``pattern`` relative to ``cwd``, returning sorted relative POSIX paths of matching files.

        Directories are matched instead of files when ``directories`` is true.
        """
        if not pattern.strip():
            raise ConfigurationError("File patterns cannot be empty")
        root = Path(cwd)
        if not root.is_dir():
            return []
        if Path(pattern).is_absolute():
            raise ConfigurationError(f"File patterns must be relative: {pattern}")
        return sorted(
            path.relative_to(root).as_posix()
            for path in root.glob(pattern)
            if (path.is_dir() if directories else path.is_file())
        )

    @staticmethod
    def read_file(file_path: str | os.PathLike[str]) -> bytes:
        return Path(file_path).read_bytes()

    @staticmethod
    def read_text(file_path: str | os.PathLike[str]) -> str:
        return Path(file_path).read_text(encoding="utf-8")

    @staticmethod
    def write_file(file_path: str | os.PathLike[str], data: bytes | str) -> Path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(data)
        return path

    @staticmethod
    def delete_file(file_path: str | os.PathLike[str]) -> None:
        path = Path(file_path)
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)

    # -- descriptor behaviour -----------------------------------------------

    def base(self, exclude_extension: bool = False) -> str | None:
        if not self._name:
            return None
        base = Path(self._name).name
        if exclude_extension:
            extension = self.extension()
            if extension and base.endswith(extension) and base != extension:
                return base[: -len(extension)]
        return base

    def defaults(
        self,
        default_dir: str | os.PathLike[str] | None,
        default_name: str | None,
        default_format: str | None,
        evaluated: bool = False,
    ) -> File:
        return File(
            self._dir or default_dir,
            self._name or default_name,
            self._format or default_format,
            self._config,
            evaluated,
        )

    def evaluate(self, **variables: Any) -> File:
        """Return a copy whose directory and name have been evaluated as expressions."""
        if self._evaluated:
            return self

        config = self._config
        evaluated_dir = config.evaluate(self._dir, **variables) if self._dir else None
        evaluated_name = config.evaluate(self._name, **variables) if self._name else None
        return File(evaluated_dir, evaluated_name, self._format, config, True)

    def extension(self) -> str | None:
        if not self._name:
            return f".{self._format}" if self._format else None
        return Path(self._name).suffix or (f".{self._format}" if self._format else None)

    def resolve(self, *paths: str) -> Path:
        return Path(self._dir or ".").joinpath(*paths).resolve()

    @property
    def absolute(self) -> Path:
        if not self._name:
            raise ConfigurationError(f"File has no name to resolve within directory: {self._dir}")
        return Path(self._dir or self._config.base_dir).joinpath(self._name).resolve()

    @property
    def relative(self) -> str:
        return self._config.relative(self.absolute)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def dir(self) -> str | None:
        return self._dir

    @property
    def evaluated(self) -> bool:
        return self._evaluated

    @property
    def format(self) -> str | None:
        return self._format

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def mime_type(self) -> str | None:
        extension = self.extension()
        if not extension:
            return None
        mime_type, _ = mimetypes.guess_type(f"file{extension}")
        return mime_type

    def __repr__(self) -> str:
        return f"File(dir={self._dir!r}, name={self._name!r}, format={self._format!r})"

    def __str__(self) -> str:
        return str(self.absolute) if self._name else repr(self)
