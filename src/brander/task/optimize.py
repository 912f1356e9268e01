"""Task writing minified copies of SVG files."""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from ..errors import TaskExecutionError
from ..file import File
from ..logging_utils import get_logger
from .task import Task, all_inputs_have_format
from .task_context import TaskContext
from .task_type import TaskType

logger = get_logger("task", "optimize")

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

# Editor bookkeeping that has no effect on rendering.
EDITOR_NAMESPACES = (
    "http://www.inkscape.org/namespaces/inkscape",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://ns.adobe.com/AdobeIllustrator/10.0/",
    "http://www.bohemiancoding.com/sketch/ns",
)
REMOVED_TAGS = {f"{{{SVG_NAMESPACE}}}metadata", f"{{{SVG_NAMESPACE}}}desc"}

ET.register_namespace("", SVG_NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)

_WHITESPACE = re.compile(r"\s+")


def optimize_svg(source: str) -> str:
    """Return ``source`` without comments, editor metadata or insignificant whitespace."""
    root = ET.fromstring(source)
    _clean(root)
    return ET.tostring(root, encoding="unicode", short_empty_elements=True)


def _is_editor_name(name: str) -> bool:
    return any(name.startswith(f"{{{namespace}}}") for namespace in EDITOR_NAMESPACES)


def _clean(element: ET.Element) -> None:
    for name in [name for name in element.attrib if _is_editor_name(name)]:
        del element.attrib[name]
    for name, value in list(element.attrib.items()):
        element.attrib[name] = _WHITESPACE.sub(" ", value).strip()

    if element.text is not None and not element.text.strip():
        element.text = None

    for child in list(element):
        if not isinstance(child.tag, str) or child.tag in REMOVED_TAGS or _is_editor_name(child.tag):
            _remove(element, child)
            continue
        if child.tail is not None and not child.tail.strip():
            child.tail = None
        _clean(child)


def _remove(parent: ET.Element, child: ET.Element) -> None:
    # Keep text following the removed element attached to its previous sibling.
    if child.tail and child.tail.strip():
        index = list(parent).index(child)
        if index:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + child.tail
        else:
            parent.text = (parent.text or "") + child.tail
    parent.remove(child)


class OptimizeSvgTask(Task):
    """Minifies SVG files, writing ``<name>.min.svg`` next to the input unless told otherwise."""

    def get_type(self) -> TaskType:
        return TaskType.OPTIMIZE

    def supports(self, context: TaskContext) -> bool:
        return all_inputs_have_format(context, "svg")

    def execute(self, context: TaskContext) -> None:
        config = context.config
        for input_file in context.input_files:
            input_path = input_file.absolute
            output_file = (
                (context.output_file or File(None, None, None, config))
                .defaults(input_file.dir, "{{ file.base(true) }}.min.svg", input_file.format)
                .evaluate(file=input_file)
            )

            logger.debug("Reading SVG file to be optimized: %s", input_path)
            source = File.read_text(input_path)

            logger.debug("Optimizing SVG file: %s", input_path)
            try:
                output = optimize_svg(source)
            except ET.ParseError as exc:
                raise TaskExecutionError(type(self).__name__, f"Unable to parse SVG file {input_path}: {exc}", cause=exc) from exc

            logger.debug("Writing optimized SVG file: %s", output_file.absolute)
            File.write_file(output_file.absolute, output)
            config.logger.info("Optimized SVG file: %s -> %s", input_file.relative, output_file.relative)
