"""Tasks bundling every input file of a context into a single output file."""
from __future__ import annotations

import zipfile
import zlib

from ..file import File
from ..logging_utils import get_logger
from ..size import Size
from ..utils import pluralize
from .convert import SvgRasterizingTask
from .rasterizer import pngs_to_ico, resize_png
from .task import Task, all_inputs_have_format, output_has_format
from .task_context import TaskContext
from .task_type import TaskType

logger = get_logger("task", "package")


def _package_output(context: TaskContext, extension: str) -> File:
    input_file = context.input_files[0]
    return context.output_file.defaults(
        input_file.dir,
        f"{{{{ file.base(true) }}}}.{extension}",
        input_file.format,
    ).evaluate(file=input_file)


def _nth_size(context: TaskContext, index: int) -> Size | None:
    sizes = context.option("sizes") or []
    return sizes[index] if index < len(sizes) else None


class PackageAnyToZipTask(Task):
    """Stores every input in a ZIP archive under its path relative to the configuration file.

    The ``compression`` option is a zlib level from 0 to 9; -1 selects the zlib default.
    """

    def get_type(self) -> TaskType:
        return TaskType.PACKAGE

    def supports(self, context: TaskContext) -> bool:
        return output_has_format(context, "zip")

    def execute(self, context: TaskContext) -> None:
        input_files = context.input_files
        output_file = _package_output(context, "zip")
        output_path = output_file.absolute
        level = int(context.option("compression", zlib.Z_DEFAULT_COMPRESSION))

        logger.debug("Creating ZIP file for files: %s", output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        compresslevel = None if level == zlib.Z_DEFAULT_COMPRESSION else level
        with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel) as archive:
            for input_file in input_files:
                logger.debug("Adding file to ZIP package: %s", input_file.absolute)
                archive.writestr(input_file.relative, File.read_file(input_file.absolute))

        context.config.logger.info(
            "Packaged %d %s into ZIP file: %s (level = %d)",
            len(input_files),
            pluralize("file", len(input_files)),
            output_file.relative,
            level,
        )


class PackagePngToIcoTask(Task):
    """Combines PNG files into one multi-resolution ICO file.

    The n-th entry of ``sizes``, when present, resizes the n-th input.
    """

    def get_type(self) -> TaskType:
        return TaskType.PACKAGE

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "png") and output_has_format(context, "ico")

    def execute(self, context: TaskContext) -> None:
        input_files = context.input_files
        output_file = _package_output(context, "ico")

        pngs: list[bytes] = []
        for index, input_file in enumerate(input_files):
            logger.debug("Reading PNG file to be packaged in ICO: %s", input_file.absolute)
            png = File.read_file(input_file.absolute)
            size = _nth_size(context, index)
            pngs.append(resize_png(png, size) if size else png)

        logger.debug("Creating ICO for PNG files")
        output, sizes = pngs_to_ico(pngs, type(self).__name__)

        logger.debug("Writing packaged ICO file: %s", output_file.absolute)
        File.write_file(output_file.absolute, output)
        context.config.logger.info(
            "Packaged %d PNG %s into ICO file: %s (sizes = %s)",
            len(input_files),
            pluralize("file", len(input_files)),
            output_file.relative,
            [size.width for size in sizes],
        )


class PackageSvgToIcoTask(SvgRasterizingTask):
    """Rasterizes SVG files and combines them into one multi-resolution ICO file.

    The n-th entry of ``sizes``, when present, is the size the n-th input is rendered at.
    """

    def get_type(self) -> TaskType:
        return TaskType.PACKAGE

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "svg") and output_has_format(context, "ico")

    def execute(self, context: TaskContext) -> None:
        input_files = context.input_files
        output_file = _package_output(context, "ico")

        pngs = [
            self.rasterize(input_file, _nth_size(context, index), context)
            for index, input_file in enumerate(input_files)
        ]

        logger.debug("Creating ICO for PNGs rasterized from SVG files")
        output, sizes = pngs_to_ico(pngs, type(self).__name__)

        logger.debug("Writing packaged ICO file: %s", output_file.absolute)
        File.write_file(output_file.absolute, output)
        context.config.logger.info(
            "Packaged %d SVG %s into ICO file: %s (sizes = %s)",
            len(input_files),
            pluralize("file", len(input_files)),
            output_file.relative,
            [size.width for size in sizes],
        )
