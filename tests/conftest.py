from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from brander.config.config import Config
from brander.config.models import ConfigData
from brander.config.repository import GitRepository


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Config]:
    """Build a :class:`Config` rooted at ``tmp_path`` with LF line endings."""

    def factory(repository: GitRepository | None = None, **data: Any) -> Config:
        options = data.setdefault("options", {})
        options.setdefault("lineSeparator", "lf")
        return Config(ConfigData.model_validate(data), tmp_path / ".branderrc", repository=repository)

    return factory


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    path = tmp_path / "assets"
    path.mkdir()
    return path


def write_png(path: Path, size: tuple[int, int], color: str = "red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


ICON_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<!-- Generator: hand written -->
<svg xmlns="http://www.w3.org/2000/svg" width="32" height="32" viewBox="0 0 32 32">
  <metadata>created for tests</metadata>
  <rect   width="32"
     height="32" fill="red"/>
</svg>
"""
