"""Named colors that can be rendered in several notations."""
from __future__ import annotations

import colorsys
from typing import Any

from PIL import ImageColor

from .errors import ConfigurationError
from .utils import cast_list, trim

FORMATS = ("hex", "rgb", "hsl", "hsv", "keyword")


class Color:
    """A color declared in one format and readable in any of :data:`FORMATS`.

    ``rgb``, ``hsl`` and ``hsv`` values are lists of integers (hue in degrees, the rest as
    percentages for hsl/hsv); ``hex`` is a ``#rrggbb`` string.
    """

    def __init__(self, options: dict[str, Any]) -> None:
        color_format = trim(options.get("format")).lower()
        if color_format not in FORMATS:
            raise ConfigurationError(f"Unsupported color format: {color_format}")

        self._format = color_format
        self._name = trim(options.get("name")) or None
        self._value = [item.strip() if isinstance(item, str) else item for item in cast_list(options.get("value"))]
        self._rgb = self._to_rgb()

    def _to_rgb(self) -> tuple[int, int, int]:
        value = self._value
        try:
            if self._format in ("hex", "keyword"):
                red, green, blue = ImageColor.getrgb(str(value[0]))[:3]
                return red, green, blue
            numbers = [float(item) for item in value[:3]]
            if self._format == "rgb":
                red, green, blue = (int(round(item)) for item in numbers)
                return red, green, blue
            hue, second, third = numbers[0] / 360.0, numbers[1] / 100.0, numbers[2] / 100.0
            if self._format == "hsl":
                channels = colorsys.hls_to_rgb(hue, third, second)
            else:
                channels = colorsys.hsv_to_rgb(hue, second, third)
            red, green, blue = (int(round(channel * 255)) for channel in channels)
            return red, green, blue
        except (IndexError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid {self._format} color value: {self._value!r}") from exc

    def convert(self, color_format: str) -> Color:
        return Color({"format": color_format, "name": self._name, "value": self.as_format(color_format)})

    def as_format(self, color_format: str) -> Any:
        color_format = trim(color_format).lower()
        if color_format == self._format:
            return list(self._value)
        if color_format == "hex":
            return self.hex
        if color_format == "rgb":
            return self.rgb
        if color_format == "hsl":
            return self.hsl
        if color_format == "hsv":
            return self.hsv
        raise ConfigurationError(f"Unsupported color format: {color_format}")

    @property
    def format(self) -> str:
        return self._format

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def value(self) -> list[Any]:
        return list(self._value)

    @property
    def hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self._rgb)

    @property
    def rgb(self) -> list[int]:
        return list(self._rgb)

    @property
    def hsl(self) -> list[int]:
        hue, lightness, saturation = colorsys.rgb_to_hls(*(channel / 255.0 for channel in self._rgb))
        return [round(hue * 360), round(saturation * 100), round(lightness * 100)]

    @property
    def hsv(self) -> list[int]:
        hue, saturation, value = colorsys.rgb_to_hsv(*(channel / 255.0 for channel in self._rgb))
        return [round(hue * 360), round(saturation * 100), round(value * 100)]

    def __repr__(self) -> str:
        return f"Color(name={self._name!r}, format={self._format!r}, value={self._value!r})"
