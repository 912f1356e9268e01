"""SVG rasterization and ICO encoding shared by the convert and package tasks."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Any

from PIL import Image

from ..errors import TaskExecutionError
from ..logging_utils import get_logger
from ..size import Size

logger = get_logger("task", "rasterizer")

# Largest icon dimension the ICO format can hold.
MAX_ICO_SIZE = 256


class SvgRasterizer:
    """Renders SVG documents to PNG bytes with CairoSVG.

    CairoSVG is imported on first use so that runs without SVG tasks never need the native Cairo
    library. A rasterizer is opened by a task's ``before_all`` and closed by its ``after_all``.
    """

    def __init__(self, task: str) -> None:
        self.task = task
        self._cairosvg: Any = None
        self.closed = False

    def close(self) -> None:
        self._cairosvg = None
        self.closed = True

    def convert(
        self,
        svg: bytes,
        *,
        size: Size | None = None,
        background: str | None = None,
        base_url: str | None = None,
        base_file: str | Path | None = None,
        scale: float | None = None,
    ) -> bytes:
        """Return ``svg`` rendered as PNG, optionally stretched to ``size``.

        Relative references within the SVG resolve against ``base_url``, or ``base_file`` when no
        URL is given.
        """
        if self.closed:
            raise TaskExecutionError(self.task, "SVG rasterizer has already been closed")

        cairosvg = self._load()
        options: dict[str, Any] = {"bytestring": svg}
        if background:
            options["background_color"] = background
        if base_url:
            options["url"] = base_url
        elif base_file:
            options["url"] = Path(base_file).resolve().as_uri()
        if scale:
            options["scale"] = float(scale)
        if size is not None:
            options["output_width"] = size.width
            options["output_height"] = size.height

        try:
            return cairosvg.svg2png(**options)
        except Exception as exc:
            raise TaskExecutionError(self.task, f"Failed to render SVG with CairoSVG: {exc}", cause=exc) from exc

    def _load(self) -> Any:
        if self._cairosvg is None:
            try:
                import cairosvg  # type: ignore[import]
            except (ImportError, OSError) as exc:
                raise TaskExecutionError(
                    self.task,
                    "cairosvg is required to convert SVG files. Install 'cairosvg' and the Cairo library.",
                    cause=exc,
                ) from exc
            logger.debug("Loaded CairoSVG %s", getattr(cairosvg, "__version__", "?"))
            self._cairosvg = cairosvg
        return self._cairosvg


def resize_png(png: bytes, size: Size) -> bytes:
    """Stretch ``png`` to exactly ``size``, keeping transparency."""
    with Image.open(io.BytesIO(png)) as image:
        if image.size == (size.width, size.height):
            return png
        resized = image.convert("RGBA").resize((size.width, size.height), Image.Resampling.LANCZOS)
    buffer = io.BytesIO()
    resized.save(buffer, format="PNG")
    return buffer.getvalue()


def png_to_jpeg(png: bytes, quality: int = 100, background: str | None = None) -> bytes:
    """Flatten ``png`` onto ``background`` (white by default) and encode it as JPEG."""
    with Image.open(io.BytesIO(png)) as image:
        rgba = image.convert("RGBA")
    flattened = Image.new("RGBA", rgba.size, background or "white")
    flattened.alpha_composite(rgba)
    buffer = io.BytesIO()
    flattened.convert("RGB").save(buffer, format="JPEG", quality=int(quality))
    return buffer.getvalue()


def pngs_to_ico(pngs: list[bytes], task: str) -> tuple[bytes, list[Size]]:
    """Encode every PNG as one image of a multi-resolution ICO file.

    Returns the ICO bytes along with the sizes it holds, smallest first.
    """
    images: list[Image.Image] = []
    for png in pngs:
        with Image.open(io.BytesIO(png)) as image:
            images.append(image.convert("RGBA"))

    oversized = [image.size for image in images if max(image.size) > MAX_ICO_SIZE]
    if oversized:
        raise TaskExecutionError(task, f"ICO images cannot exceed {MAX_ICO_SIZE}px: {oversized}")

    unique: dict[tuple[int, int], Image.Image] = {}
    for image in images:
        unique.setdefault(image.size, image)
    ordered = sorted(unique.values(), key=lambda image: image.size, reverse=True)

    buffer = io.BytesIO()
    largest, *others = ordered
    largest.save(
        buffer,
        format="ICO",
        sizes=[image.size for image in ordered],
        append_images=others,
    )
    return buffer.getvalue(), [Size(*image.size) for image in reversed(ordered)]
