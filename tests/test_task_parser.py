from __future__ import annotations

from pathlib import Path

import pytest

from brander.config.context_parser import ParsedEvent
from brander.errors import ConfigurationError
from brander.size import Size
from brander.task import TaskContextParser, TaskType


def _touch(*paths: Path) -> None:
    for path in paths:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x")


def test_parse_next_yields_batches_then_none(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.svg", assets_dir / "mark.svg")
    config = make_config()
    parser = TaskContextParser(
        [
            {"task": "optimize", "input": {"files": "logo.svg"}},
            None,
            {"task": "optimize", "input": {"files": "*.svg"}},
        ],
        config,
    )

    first = parser.parse_next()
    assert [file.name for file in first[0].input_files] == ["logo.svg"]
    assert parser.parse_next() == []
    third = parser.parse_next()
    assert [file.name for file in third[0].input_files] == ["logo.svg", "mark.svg"]
    assert parser.parse_next() is None

    parser.reset()
    assert len(parser.parse_remaining()) == 2


def test_listeners_are_notified_with_each_batch(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.svg")
    parser = TaskContextParser([{"task": "optimize", "input": {"files": "*.svg"}}], make_config())
    events: list[ParsedEvent] = []
    parser.on_parsed(events.append)

    contexts = parser.parse_remaining()

    assert len(events) == 1
    assert events[0].index == 0
    assert events[0].contexts == contexts
    assert events[0].data["task"] == "optimize"


def test_unmatched_patterns_produce_no_contexts(make_config, assets_dir: Path) -> None:
    parser = TaskContextParser([{"input": {"files": "*.gif"}}], make_config())
    assert parser.parse_remaining() == []


def test_mixed_formats_require_grouping(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.png", assets_dir / "logo.svg")
    parser = TaskContextParser([{"task": "clean", "input": {"files": "logo.*"}}], make_config())

    with pytest.raises(ConfigurationError, match="options.groupBy"):
        parser.parse_remaining()


def test_group_by_expression_splits_contexts_by_format(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.png", assets_dir / "logo.svg", assets_dir / "mark.svg")
    parser = TaskContextParser(
        [{"task": "clean", "input": {"files": "*"}, "options": {"groupBy": "{{ file.format }}"}}],
        make_config(),
    )

    contexts = parser.parse_remaining()

    assert [context.input_format for context in contexts] == ["png", "svg"]
    assert [len(context.input_files) for context in contexts] == [1, 2]
    assert all(context.type is TaskType.CLEAN for context in contexts)


def test_group_that_still_mixes_formats_is_named(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.png", assets_dir / "logo.svg")
    parser = TaskContextParser(
        [{"task": "clean", "input": {"files": "*"}, "options": {"groupBy": "{{ file.base(true) }}"}}],
        make_config(),
    )

    with pytest.raises(ConfigurationError, match='within resolved group: "logo"'):
        parser.parse_remaining()


def test_callable_group_by(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "a" / "one.png", assets_dir / "b" / "two.png", assets_dir / "b" / "three.png")

    def group_by(config, file):
        return Path(file.dir).name

    parser = TaskContextParser(
        [{"task": "clean", "input": {"files": "**/*.png"}, "options": {"groupBy": group_by}}],
        make_config(),
    )

    contexts = parser.parse_remaining()

    assert [[file.name for file in context.input_files] for context in contexts] == [["one.png"], ["three.png", "two.png"]]


def test_options_are_copied_for_each_context(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.png", assets_dir / "logo.svg")
    parser = TaskContextParser(
        [
            {
                "task": "convert",
                "input": {"files": "*"},
                "output": {"format": "ico"},
                "options": {"groupBy": "{{ file.format }}", "sizes": [16, "32x24"], "extra": {"key": "value"}},
            }
        ],
        make_config(),
    )

    first, second = parser.parse_remaining()
    first.options["extra"]["key"] = "changed"

    assert second.options["extra"]["key"] == "value"
    assert first.option("sizes") == [Size(16, 16), Size(32, 24)]
    assert first.output_file.format == "ico"


def test_output_is_required_for_convert(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "logo.svg")
    parser = TaskContextParser([{"task": "convert", "input": {"files": "*.svg"}}], make_config())

    with pytest.raises(ConfigurationError, match='"output" configuration is required'):
        parser.parse_remaining()


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ({"task": "clean"}, '"input" configuration is required'),
        ({"task": "clean", "input": {}}, '"input" configuration is required'),
        ({"task": "clean", "input": {"dir": "x"}}, '"input.files" configuration is required'),
        ({"task": "clean", "input": {"files": 3}}, "can only be a string or an array"),
        ({"task": "clean", "input": {"files": ["*.svg", " "]}}, "cannot contain null or empty patterns"),
        ({"task": "clean", "input": {"files": "{{ '' }}"}}, "evaluate to empty"),
        ({"task": "unknown", "input": {"files": "*.svg"}}, "unknown"),
        ({"input": {"files": "*.svg"}}, '"task" configuration is required'),
    ],
)
def test_invalid_entries(make_config, assets_dir: Path, entry: dict, message: str) -> None:
    _touch(assets_dir / "logo.svg")
    parser = TaskContextParser([entry], make_config())

    with pytest.raises(ConfigurationError, match=message):
        parser.parse_remaining()


def test_input_dir_is_evaluated_under_assets(make_config, tmp_path: Path) -> None:
    _touch(tmp_path / "branding" / "icons" / "logo.svg")
    config = make_config(name="icons", options={"assets": {"dir": "branding"}})
    parser = TaskContextParser([{"task": "clean", "input": {"dir": "{{ config.name }}", "files": "*.svg"}}], config)

    (context,) = parser.parse_remaining()

    assert context.input_files[0].relative == "branding/icons/logo.svg"


def test_convert_entry_with_sizes_and_named_output(make_config, assets_dir: Path) -> None:
    _touch(assets_dir / "icon.svg")
    parser = TaskContextParser(
        [
            {
                "task": "convert",
                "input": {"files": "icon.svg"},
                "output": {"files": "icon.png"},
                "options": {"sizes": ["16x16", "32x32"]},
            }
        ],
        make_config(),
    )

    (context,) = parser.parse_remaining()

    assert context.type is TaskType.CONVERT
    assert [(file.name, file.format) for file in context.input_files] == [("icon.svg", "svg")]
    assert (context.output_file.name, context.output_file.format) == ("icon.png", "png")
    assert context.option("sizes") == [Size(16, 16), Size(32, 32)]
