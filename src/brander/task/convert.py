"""Tasks converting each input file into one output file per requested size."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..file import File
from ..logging_utils import get_logger
from ..size import Size
from .rasterizer import SvgRasterizer, png_to_jpeg, pngs_to_ico, resize_png
from .task import Task, all_inputs_have_format, output_has_format
from .task_context import TaskContext
from .task_type import TaskType

if TYPE_CHECKING:
    from ..config.config import Config

logger = get_logger("task", "convert")

SIZED_OUTPUT_NAME = "{{{{ file.base(true) }}}}{{{{ '-' ~ size if size else '' }}}}.{extension}"


class SvgRasterizingTask(Task):
    """Base for tasks that render SVG input, owning a :class:`SvgRasterizer` for the run."""

    def __init__(self) -> None:
        self._rasterizer: SvgRasterizer | None = None

    def before_all(self, config: Config) -> None:
        self._rasterizer = SvgRasterizer(type(self).__name__)

    def after_all(self, config: Config) -> None:
        if self._rasterizer is not None:
            self._rasterizer.close()
        self._rasterizer = None

    def rasterize(self, input_file: File, size: Size | None, context: TaskContext) -> bytes:
        input_path = input_file.absolute
        base_url = context.option("baseUrl")
        base_file = context.option("baseFile") or input_path

        rasterizer = self._rasterizer
        if rasterizer is None:
            rasterizer = self._rasterizer = SvgRasterizer(type(self).__name__)

        logger.debug("Reading SVG file to be rasterized: %s", input_path)
        svg = File.read_file(input_path)

        logger.debug("Rasterizing SVG file%s: %s", f" at {size}" if size else "", input_path)
        return rasterizer.convert(
            svg,
            size=size,
            background=context.option("background"),
            base_url=base_url,
            base_file=None if base_url else base_file,
            scale=context.option("scale"),
        )


def _sizes(context: TaskContext) -> list[Size | None]:
    return list(context.option("sizes") or []) or [None]


def _sized_output(context: TaskContext, input_file: File, size: Size | None, extension: str) -> File:
    return context.output_file.defaults(
        input_file.dir,
        SIZED_OUTPUT_NAME.format(extension=extension),
        input_file.format,
    ).evaluate(file=input_file, size=Size.stringify(size))


class ConvertSvgToPngTask(SvgRasterizingTask):
    def get_type(self) -> TaskType:
        return TaskType.CONVERT

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "svg") and output_has_format(context, "png")

    def execute(self, context: TaskContext) -> None:
        for input_file in context.input_files:
            for size in _sizes(context):
                output_file = _sized_output(context, input_file, size, "png")
                output = self.rasterize(input_file, size, context)

                logger.debug("Writing converted PNG file: %s", output_file.absolute)
                File.write_file(output_file.absolute, output)
                context.config.logger.info(
                    "Converted SVG file to PNG file: %s -> %s", input_file.relative, output_file.relative
                )


class ConvertSvgToJpegTask(SvgRasterizingTask):
    """Renders SVG to JPEG, flattening transparency onto ``background`` and honouring ``quality``."""

    def get_type(self) -> TaskType:
        return TaskType.CONVERT

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "svg") and output_has_format(context, "jpeg", "jpg")

    def execute(self, context: TaskContext) -> None:
        quality = context.option("quality", 100)
        extension = context.output_file.format

        for input_file in context.input_files:
            for size in _sizes(context):
                output_file = _sized_output(context, input_file, size, extension)
                png = self.rasterize(input_file, size, context)
                output = png_to_jpeg(png, quality=quality, background=context.option("background"))

                logger.debug("Writing converted JPEG file: %s", output_file.absolute)
                File.write_file(output_file.absolute, output)
                context.config.logger.info(
                    "Converted SVG file to JPEG file: %s -> %s (quality = %s)",
                    input_file.relative,
                    output_file.relative,
                    quality,
                )


class ConvertSvgToIcoTask(SvgRasterizingTask):
    """Renders SVG to single-image ICO files, one for each requested size."""

    def get_type(self) -> TaskType:
        return TaskType.CONVERT

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "svg") and output_has_format(context, "ico")

    def execute(self, context: TaskContext) -> None:
        for input_file in context.input_files:
            for size in _sizes(context):
                output_file = _sized_output(context, input_file, size, "ico")
                png = self.rasterize(input_file, size, context)
                output, _ = pngs_to_ico([png], type(self).__name__)

                logger.debug("Writing converted ICO file: %s", output_file.absolute)
                File.write_file(output_file.absolute, output)
                context.config.logger.info(
                    "Converted SVG file to ICO file: %s -> %s", input_file.relative, output_file.relative
                )


class ConvertPngToIcoTask(Task):
    """Wraps PNG files in single-image ICO files, resizing them first when a size is requested."""

    def get_type(self) -> TaskType:
        return TaskType.CONVERT

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "png") and output_has_format(context, "ico")

    def execute(self, context: TaskContext) -> None:
        for input_file in context.input_files:
            input_path = input_file.absolute
            logger.debug("Reading PNG file to be converted to ICO: %s", input_path)
            png = File.read_file(input_path)

            for size in _sizes(context):
                output_file = _sized_output(context, input_file, size, "ico")
                if size is not None:
                    logger.debug("Resizing PNG to be converted to ICO: %s", input_path)
                    resized = resize_png(png, size)
                else:
                    resized = png
                output, _ = pngs_to_ico([resized], type(self).__name__)

                logger.debug("Writing converted ICO file: %s", output_file.absolute)
                File.write_file(output_file.absolute, output)
                context.config.logger.info(
                    "Converted PNG file to ICO file: %s -> %s", input_file.relative, output_file.relative
                )
