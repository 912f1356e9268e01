from __future__ import annotations

from pathlib import Path

import pytest

from brander.config.loader import ConfigLoader
from brander.config.repository import GitRepository
from brander.errors import ConfigurationError, ExpressionError
from brander.task import TaskContextParser

CONFIG_YAML = """
name: widgets
title: Widgets
repository: github:acme/widgets
options:
  lineSeparator: crlf
  assets:
    dir: branding
tasks:
  - task: optimize
    input:
      files: "*.svg"
docs:
  - doc: README.md
"""


def test_loader_finds_default_file(tmp_path: Path) -> None:
    (tmp_path / ".branderrc.yml").write_text(CONFIG_YAML)

    config = ConfigLoader(tmp_path).load()

    assert config.file_path == (tmp_path / ".branderrc.yml").resolve()
    assert config.name == "widgets"
    assert config.title == "Widgets"
    assert config.line_separator == "\r\n"
    assert config.assets_dir == "branding"
    assert config.docs_dir == "docs"
    assert config.tasks[0]["task"] == "optimize"
    assert config.repository == GitRepository("github.com", "acme", "widgets")


def test_loader_reads_json(tmp_path: Path) -> None:
    (tmp_path / "brander.json").write_text('{"name": "json-project", "repository": {"type": "svn", "url": "x"}}')

    config = ConfigLoader(tmp_path).load("brander.json")

    assert config.name == "json-project"
    assert config.repository is None


def test_raw_entries_are_copies(tmp_path: Path) -> None:
    (tmp_path / ".branderrc").write_text(CONFIG_YAML)
    config = ConfigLoader(tmp_path).load()

    config.tasks[0]["task"] = "changed"

    assert config.tasks[0]["task"] == "optimize"


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("", "contains no data"),
        ("- a\n- b\n", "must contain an object"),
        ("tasks: not-a-list\nrepository: github:a/b\n", "Invalid configuration file"),
        ("name: [unclosed\n", "Unable to parse"),
    ],
)
def test_loader_rejects_bad_files(tmp_path: Path, contents: str, message: str) -> None:
    (tmp_path / ".branderrc").write_text(contents)

    with pytest.raises(ConfigurationError, match=message):
        ConfigLoader(tmp_path).load()


def test_loader_requires_a_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Unable to find configuration file"):
        ConfigLoader(tmp_path).load()
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigLoader(tmp_path).load("missing.yml")


def test_python_config_supports_callable_group_by(tmp_path: Path) -> None:
    (tmp_path / ".branderrc.py").write_text(
        "def group_by(config, file):\n"
        "    return file.format\n"
        "\n"
        "\n"
        "def config():\n"
        "    return {\n"
        "        'repository': 'github:acme/widgets',\n"
        "        'tasks': [{'task': 'clean', 'input': {'files': '*'}, 'options': {'groupBy': group_by}}],\n"
        "    }\n"
    )
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "a.png").write_bytes(b"")
    (assets / "b.svg").write_text("")

    config = ConfigLoader(tmp_path).load()
    contexts = TaskContextParser(config.tasks, config).parse_remaining()

    assert [context.input_format for context in contexts] == ["png", "svg"]


def test_urls_use_repository(tmp_path: Path) -> None:
    (tmp_path / ".branderrc").write_text(CONFIG_YAML)
    config = ConfigLoader(tmp_path).load()

    assert config.doc_url("docs/README.md", "Getting Started") == (
        "https://github.com/acme/widgets/blob/main/docs/README.md#getting-started"
    )
    assert config.asset_url(["branding", "logo.svg"]) == (
        "https://raw.githubusercontent.com/acme/widgets/main/branding/logo.svg"
    )


def test_expression_errors_name_the_expression(tmp_path: Path) -> None:
    (tmp_path / ".branderrc").write_text(CONFIG_YAML)
    config = ConfigLoader(tmp_path).load()

    assert config.evaluate("{{ config.name }}-{{ value }}", value=1) == "widgets-1"
    with pytest.raises(ExpressionError, match="missing"):
        config.evaluate("{{ missing }}")
    with pytest.raises(ExpressionError):
        config.evaluate("{{ unclosed")


def test_repository_urls_are_parsed() -> None:
    for url in (
        "https://github.com/acme/widgets.git",
        "git@github.com:acme/widgets.git",
        "git+ssh://git@github.com/acme/widgets.git",
        "acme/widgets",
    ):
        assert GitRepository.parse_url(url) == GitRepository("github.com", "acme", "widgets")

    gitlab = GitRepository.parse_url("gitlab:acme/widgets#develop")
    assert gitlab.file_url("README.md") == "https://gitlab.com/acme/widgets/-/blob/develop/README.md"
    assert GitRepository.parse_url("https://example.com/acme/widgets") is None


def test_url_templates_take_precedence(make_config) -> None:
    config = make_config(
        options={
            "assets": {"url": "https://cdn.example.com/{{ file }}"},
            "docs": {"url": "https://docs.example.com/{{ file }}#{{ fragment }}"},
        },
        repository=GitRepository("github.com", "acme", "widgets"),
    )

    assert config.asset_url("/assets/logo.svg") == "https://cdn.example.com/assets/logo.svg"
    assert config.doc_url("docs/README.md", "Usage") == "https://docs.example.com/docs/README.md#Usage"
