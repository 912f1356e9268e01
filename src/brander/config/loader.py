"""Utilities for finding and loading Brander configuration files."""
from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..logging_utils import get_logger
from .config import Config
from .models import ConfigData
from .package import load_package
from .repository import get_repository

logger = get_logger("config")

DEFAULT_FILE_NAMES = (
    ".branderrc",
    ".branderrc.json",
    ".branderrc.yaml",
    ".branderrc.yml",
    ".branderrc.py",
)


class ConfigLoader:
    """Locate, parse and validate a configuration file, producing a :class:`Config`."""

    def __init__(self, base_dir: Path | None = None, logger: logging.Logger | None = None) -> None:
        self.base_dir = (base_dir or Path.cwd()).resolve()
        self.logger = logger

    def find_file_path(self) -> Path | None:
        for file_name in DEFAULT_FILE_NAMES:
            candidate = self.base_dir / file_name
            if candidate.is_file():
                return candidate
        return None

    def load(self, file_path: Path | str | None = None) -> Config:
        if file_path is None:
            logger.debug("Finding configuration file as none was specified...")
            path = self.find_file_path()
            if path is None:
                raise ConfigurationError(f"Unable to find configuration file in {self.base_dir}")
        else:
            path = (self.base_dir / file_path).resolve()
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")

        logger.debug("Loading configuration file: %s", path)
        payload = load_module(path) if path.suffix == ".py" else self.parse(path.read_text(encoding="utf-8"), path)
        if not payload:
            raise ConfigurationError(f"Configuration file contains no data: {path}")
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Configuration file must contain an object: {path}")

        try:
            data = ConfigData.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration file {path}:\n{exc}") from exc

        logger.debug("Successfully loaded configuration file: %s", path)

        package = load_package(path.parent)
        repository = get_repository(data.repository, path.parent, package.repository)
        return Config(data, path, logger=self.logger, package=package, repository=repository)

    def parse(self, contents: str, file_path: Path) -> Any:
        """Parse JSON or YAML ``contents``; YAML is a superset of JSON so one parser serves both."""
        if file_path.suffix not in ("", ".json", ".yaml", ".yml"):
            raise ConfigurationError(f"Unsupported configuration file type: {file_path}")
        try:
            return yaml.safe_load(contents)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Unable to parse configuration file {file_path}: {exc}") from exc


def load_module(file_path: Path) -> Any:
    """Execute a Python configuration module and return its ``CONFIG`` value or the result of ``config()``."""
    module_spec = importlib.util.spec_from_file_location(f"_brander_config_{abs(hash(file_path))}", file_path)
    if module_spec is None or module_spec.loader is None:
        raise ConfigurationError(f"Unable to load configuration module: {file_path}")
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)

    if callable(getattr(module, "config", None)):
        return module.config()
    if hasattr(module, "CONFIG"):
        return module.CONFIG
    raise ConfigurationError(f"Configuration module must define CONFIG or config(): {file_path}")
