from __future__ import annotations

from pathlib import Path

import pytest
from conftest import write_png

from brander.color import Color
from brander.config.scope import Scope
from brander.doc import DocumentContext
from brander.errors import ConfigurationError
from brander.file import File
from brander.markdown import create_image, create_link, create_table
from brander.size import Size
from brander.task import TaskContext, TaskType


@pytest.mark.parametrize(
    ("value", "expected"),
    [(32, Size(32, 32)), ("16", Size(16, 16)), (" 32 x 24 ", Size(32, 24)), ("64X48", Size(64, 48))],
)
def test_size_parse(value, expected: Size) -> None:
    assert Size.parse(value) == expected


@pytest.mark.parametrize("value", [-1, 0, 0.5, "0", "0x0", "16x0", True, "big", "16x", None, [16]])
def test_size_parse_rejects_invalid_values(value) -> None:
    with pytest.raises(ConfigurationError):
        Size.parse(value)


def test_size_from_png(tmp_path: Path) -> None:
    path = write_png(tmp_path / "wide.png", (40, 20))

    assert Size.from_image(path) == [Size(40, 20)]
    assert Size.from_image(path.read_bytes()) == [Size(40, 20)]
    assert str(Size(40, 20)) == "40x20"
    assert Size.stringify(None) is None


def test_file_descriptor(make_config, tmp_path: Path) -> None:
    config = make_config(name="demo")
    file = File(None, "{{ config.name }}-{{ size }}.png", None, config)

    evaluated = file.defaults(tmp_path / "out", None, "png").evaluate(size="16x16")

    assert evaluated.name == "demo-16x16.png"
    assert evaluated.format == "png"
    assert evaluated.evaluated
    assert evaluated.absolute == (tmp_path / "out" / "demo-16x16.png").resolve()
    assert evaluated.relative == "out/demo-16x16.png"
    assert evaluated.base() == "demo-16x16.png"
    assert evaluated.base(True) == "demo-16x16"
    assert evaluated.mime_type == "image/png"
    assert evaluated.evaluate(size="ignored") is evaluated


def test_file_helpers(tmp_path: Path) -> None:
    File.write_file(tmp_path / "a" / "b.txt", "hello")
    (tmp_path / "a" / "c").mkdir()

    assert File.find_files("**/*.txt", tmp_path) == ["a/b.txt"]
    assert File.find_files("a/*", tmp_path, directories=True) == ["a/c"]
    assert File.find_files("*.txt", tmp_path / "missing") == []
    with pytest.raises(ConfigurationError, match="cannot be empty"):
        File.find_files(" ", tmp_path)
    assert File.derive_format("Logo.SVG") == "svg"
    assert File.derive_format("logo.svg", "PNG") == "png"

    File.delete_file(tmp_path / "a")
    assert not (tmp_path / "a").exists()


def test_markdown_builders() -> None:
    assert create_link("Docs", "https://example.com") == "[Docs](https://example.com)"
    assert create_image("Logo", "logo.png", "Brand") == '![Logo](logo.png "Brand")'
    assert create_table(["Name"], [["a"], ["b"]], "\n") == "| Name |\n| ---- |\n| a |\n| b |"


def test_color_conversions() -> None:
    color = Color({"format": "rgb", "name": "Sky", "value": [0, 128, 255]})

    assert color.hex == "#0080ff"
    assert color.convert("hex").value == ["#0080ff"]
    assert Color({"format": "keyword", "value": "red"}).rgb == [255, 0, 0]
    assert Color({"format": "hsl", "value": [0, 100, 50]}).rgb == [255, 0, 0]
    with pytest.raises(ConfigurationError):
        Color({"format": "cmyk", "value": [0, 0, 0, 0]})


def test_scope_tracks_documents_recursively(make_config, tmp_path: Path) -> None:
    config = make_config()
    parent = DocumentContext("container", {}, None, config)
    child = DocumentContext("hr", {}, parent, config)
    parent.adopt([child])
    task = TaskContext(TaskType.CLEAN, [File(tmp_path, "a.txt", "txt", config, True)], None, {}, config)
    scope = Scope()

    scope.add_doc(parent)
    scope.add_all_tasks([task])
    scope.attributes["key"] = "value"

    assert list(scope.docs) == [parent, child]
    assert list(scope.tasks) == [task]

    scope.remove_doc(parent)
    assert list(scope.docs) == []

    scope.clear()
    assert list(scope.tasks) == []
    assert scope.attributes == {}


def test_task_context_validates_inputs(make_config, tmp_path: Path) -> None:
    config = make_config()
    png = File(tmp_path, "a.png", "png", config, True)
    svg = File(tmp_path, "b.svg", "svg", config, True)

    with pytest.raises(ConfigurationError):
        TaskContext(TaskType.CLEAN, [], None, {}, config)
    with pytest.raises(ConfigurationError):
        TaskContext(TaskType.CLEAN, [png, svg], None, {}, config)
    with pytest.raises(ConfigurationError):
        TaskContext(TaskType.CONVERT, [png], None, {}, config)

    context = TaskContext(TaskType.CLEAN, [png], None, {"nested": {"value": 1}}, config)
    assert context.option("nested.value") == 1
    assert context.option("nested.missing", "default") == "default"
