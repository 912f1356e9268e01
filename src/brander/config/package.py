"""Project metadata discovered next to the configuration file."""
from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..logging_utils import get_logger
from ..utils import get_path, trim

logger = get_logger("config", "package")

PACKAGE_FILE_NAMES = ("pyproject.toml", "package.json")


@dataclass(slots=True)
class Package:
    """Name, homepage and repository declared by a ``pyproject.toml`` or ``package.json``."""

    file_path: Path | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return get_path(self.data, name, default)

    @property
    def name(self) -> str | None:
        return trim(self.get("name")) or None

    @property
    def homepage(self) -> str | None:
        return trim(self.get("homepage")) or None

    @property
    def repository(self) -> str | None:
        repository = self.get("repository")
        if isinstance(repository, dict):
            repository = repository.get("url")
        return trim(repository) or None


def find_package_file(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        for file_name in PACKAGE_FILE_NAMES:
            candidate = directory / file_name
            if candidate.is_file():
                return candidate
    return None


def load_package(start: Path) -> Package:
    """Load the nearest package metadata at or above ``start``, returning an empty package when unavailable."""
    file_path = find_package_file(start)
    if file_path is None:
        logger.debug("Unable to find package file for path: %s", start)
        return Package()

    logger.debug("Loading package file found at path: %s", file_path)
    try:
        if file_path.suffix == ".toml":
            payload = tomllib.loads(file_path.read_text(encoding="utf-8"))
            return Package(file_path=file_path, data=_from_pyproject(payload))
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Package info unavailable as an error occurred while trying to load it: %s", exc)
        return Package()
    return Package(file_path=file_path, data=payload if isinstance(payload, dict) else {})


def _from_pyproject(payload: dict[str, Any]) -> dict[str, Any]:
    project = payload.get("project") or {}
    urls = {key.lower(): value for key, value in (project.get("urls") or {}).items()}
    return {
        "name": project.get("name"),
        "homepage": urls.get("homepage"),
        "repository": urls.get("repository") or urls.get("source"),
    }
