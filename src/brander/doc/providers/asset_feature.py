"""Provider showcasing the generated assets of one or more directories."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from ...errors import ConfigurationError
from ...file import File
from ...logging_utils import get_logger
from ...markdown import append_table, create_image, create_link
from ...size import Size
from ...utils import cast_list, pluralize, trim
from ..document_context import AssetFeatureDocumentContext, DocumentContext
from ..document_provider import DocumentProvider

if TYPE_CHECKING:
    from ...config.config import Config
    from ..document_context_parser import DocumentContextParser
    from ..document_context_runner import DocumentContextRunner

logger = get_logger("doc", "asset-feature")

DEFAULT_SORT_BY = "{{ files[0].file.mime_type }}"
HEADERS = ("Type", "Sizes", "Optimized")


def find_files(dir_path: str, pattern: Any, config: Config) -> list[File]:
    asset_dir = config.asset_path(dir_path)
    pattern = trim(pattern)
    files: list[File] = []
    for file_path in File.find_files(pattern, cwd=asset_dir) if pattern else []:
        path = asset_dir / file_path
        files.append(File(path.parent, path.name, File.derive_format(path.name), config, True))
    return files


def get_dir_paths(data: dict[str, Any], config: Config) -> list[str]:
    assets_dir = config.resolve(config.assets_dir)
    dir_pattern = trim(data.get("dir"))
    if not dir_pattern:
        return [str(assets_dir)]
    return File.find_files(dir_pattern, cwd=assets_dir, directories=True)


def get_file_groups(dir_path: str, data: dict[str, Any], config: Config) -> list[dict[str, Any]]:
    """Collect a group for every entry of ``files`` matching at least one file within ``dir_path``.

    An entry is either a pattern or a ``[pattern, optimized pattern]`` pair. Groups are ordered by
    the ``sortBy`` expression, given alone or as ``[expression, "asc" | "desc"]``.
    """
    file_groups: list[dict[str, Any]] = []
    for descriptor in cast_list(data.get("files")):
        if isinstance(descriptor, list):
            main_pattern, optimized_pattern = (descriptor + [None, None])[:2]
        else:
            main_pattern, optimized_pattern = descriptor, None

        files = find_files(dir_path, main_pattern, config)
        if not files:
            continue
        optimized = next(iter(find_files(dir_path, optimized_pattern, config)), None)

        infos = []
        for file in files:
            sizes = sorted(Size.from_image(file.absolute), key=lambda size: (size.width, size.height))
            infos.append({"file": file, "sizes": sizes})
        infos.sort(key=lambda info: (info["sizes"][0].width, info["sizes"][0].height))
        file_groups.append({"files": infos, "optimized": optimized})

    sort_by = data.get("sortBy")
    if isinstance(sort_by, list):
        sort_value, sort_order = (sort_by + [None, None])[:2]
    else:
        sort_value, sort_order = sort_by, None
    sort_value = trim(sort_value) or DEFAULT_SORT_BY
    sort_order = trim(sort_order).lower() or "asc"
    if sort_order not in ("asc", "desc"):
        raise ConfigurationError(f'"sortBy" configuration order must be "asc" or "desc": {sort_order}')

    return sorted(
        file_groups,
        key=lambda group: config.evaluate(sort_value, **group),
        reverse=sort_order == "desc",
    )


class AssetFeatureDocumentProvider(DocumentProvider):
    """Renders a section per matching asset directory, each with a preview and a table of files.

    ``dir`` is a directory pattern relative to the assets directory (all assets when omitted);
    ``preview`` selects the image shown for each directory and ``titles`` maps preview names to
    section titles.
    """

    def get_type(self) -> str:
        return "asset-feature"

    def create_context(
        self,
        data: dict[str, Any],
        parent: DocumentContext | None,
        parser: DocumentContextParser,
    ) -> DocumentContext:
        config = parser.config
        type_name = self.get_type()
        logger.debug("Creating context for %s document...", type_name)

        context = DocumentContext(type_name, data, parent, config)
        children: list[AssetFeatureDocumentContext] = []
        for dir_path in get_dir_paths(data, config):
            preview_file = next(iter(find_files(dir_path, data.get("preview"), config)), None)
            file_groups = get_file_groups(dir_path, data, config)
            logger.debug(
                "Creating child context for %s document containing %d file %s",
                type_name,
                len(file_groups),
                pluralize("group", len(file_groups)),
            )
            children.append(
                AssetFeatureDocumentContext(
                    f"{type_name}#child", dir_path, file_groups, preview_file, data, context, config
                )
            )

        context.adopt(sorted(children, key=lambda child: child.title or ""))
        return context

    def render(self, context: DocumentContext, runner: DocumentContextRunner) -> str:
        config = context.config
        config.logger.info("Rendering %s document...", self.get_type())

        output: list[str] = []
        for child in context.children:
            assert isinstance(child, AssetFeatureDocumentContext)
            if output:
                output.append("")
            output.extend(self._render_child(child))
        return config.line_separator.join(output)

    def _render_child(self, context: AssetFeatureDocumentContext) -> list[str]:
        config = context.config
        title = self.render_title(context)
        output = [title] if title else []

        if context.preview_file is not None:
            logger.debug("Rendering preview file for %s document: %s", context.type, context.preview_file.relative)
            output.append(self._render_preview(context))
            output.append("")

        rows = [self._render_row(group, config) for group in context.file_groups]
        append_table(output, HEADERS, rows)
        return output

    def _render_preview(self, context: AssetFeatureDocumentContext) -> str:
        config = context.config
        preview_file = context.preview_file
        image = create_image(preview_file.base(), config.asset_url(preview_file.relative))
        dir_path = config.relative(Path(config.asset_path(context.dir)))
        return create_link(image, config.doc_url(dir_path))

    @staticmethod
    def _render_row(group: dict[str, Any], config: Config) -> list[str]:
        files = group["files"]
        links = [
            create_link("+".join(str(size) for size in info["sizes"]), config.asset_url(info["file"].relative))
            for info in files
        ]
        optimized = group["optimized"]
        optimized_link = create_link(optimized.base(), config.asset_url(optimized.relative)) if optimized else ""
        return [files[0]["file"].mime_type or "", " ".join(links), optimized_link]
