"""Width/height pairs parsed from configuration or read from images."""
from __future__ import annotations

import io
import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from .errors import ConfigurationError

_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*(?:[xX]\s*(\d+))?\s*$")
_LENGTH_PATTERN = re.compile(r"^\s*([\d.]+)\s*(?:px)?\s*$")


@dataclass(frozen=True, slots=True)
class Size:
    width: int
    height: int

    @classmethod
    def parse(cls, value: Any) -> Size:
        """Parse ``"32"``, ``"32x16"`` or ``32`` into a :class:`Size`.

        A single dimension is used for both width and height.
        """
        if isinstance(value, bool):
            raise ConfigurationError(f'"sizes" configuration can only contain numbers and strings: {value!r}')
        if isinstance(value, (int, float)):
            if value != value or int(value) <= 0:
                raise ConfigurationError(f'"sizes" configuration must contain only valid positive numbers: {value}')
            return cls(int(value), int(value))
        if isinstance(value, str):
            match = _SIZE_PATTERN.match(value)
            if not match:
                raise ConfigurationError(f'"sizes" configuration must contain width and optionally height: {value}')
            width = int(match.group(1))
            height = int(match.group(2)) if match.group(2) else width
            if width <= 0 or height <= 0:
                raise ConfigurationError(f'"sizes" configuration must contain only valid positive numbers: {value}')
            return cls(width, height)
        raise ConfigurationError(
            f'"sizes" configuration can only contain numbers and strings: {value!r} ({type(value).__name__})'
        )

    @classmethod
    def from_image(cls, image: bytes | str | os.PathLike[str]) -> list[Size]:
        """Return every size held by ``image``; multi-resolution ICO files produce more than one."""
        data = image if isinstance(image, bytes) else Path(image).read_bytes()
        try:
            with Image.open(io.BytesIO(data)) as opened:
                if opened.format == "ICO":
                    sizes = sorted(opened.info.get("sizes") or {opened.size})
                    return [cls(width, height) for width, height in sizes]
                return [cls(*opened.size)]
        except UnidentifiedImageError:
            size = cls._from_svg(data)
            if size is None:
                raise
            return [size]

    @classmethod
    def _from_svg(cls, data: bytes) -> Size | None:
        try:
            root = ET.fromstring(data)
        except ET.ParseError:
            return None
        if not isinstance(root.tag, str) or not root.tag.endswith("svg"):
            return None

        width = _LENGTH_PATTERN.match(root.get("width", ""))
        height = _LENGTH_PATTERN.match(root.get("height", ""))
        if width and height:
            return cls(round(float(width.group(1))), round(float(height.group(1))))

        view_box = root.get("viewBox", "").replace(",", " ").split()
        try:
            if len(view_box) == 4:
                return cls(round(float(view_box[2])), round(float(view_box[3])))
        except ValueError:
            pass
        return None

    @staticmethod
    def stringify(size: Size | None) -> str | None:
        return str(size) if size else None

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
