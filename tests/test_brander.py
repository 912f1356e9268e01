from __future__ import annotations

import logging
from pathlib import Path

import pytest
from conftest import ICON_SVG, write_png
from typer.testing import CliRunner

from brander.brander import Brander
from brander.cli import app
from brander.errors import DispatchError
from brander.size import Size
from brander.task import TaskService

CONFIG_YAML = """
name: widgets
repository: github:acme/widgets
options:
  lineSeparator: lf
tasks:
  - task: optimize
    input:
      files: "*.svg"
docs:
  - doc: README.md
    sections:
      - type: template
        content: "{{ config.name }}"
"""


def _write_brand(assets_dir: Path) -> None:
    write_png(assets_dir / "logo" / "logo.png", (64, 64))
    (assets_dir / "logo" / "logo.svg").write_text(ICON_SVG)


def test_generate_assets_then_documents(make_config, assets_dir: Path, tmp_path: Path) -> None:
    _write_brand(assets_dir)
    config = make_config(
        options={
            "assets": {"url": "{{ file }}"},
            "docs": {"url": "{{ file }}", "disableDefaultFooter": True},
        },
        tasks=[
            {"task": "optimize", "input": {"files": "logo/*.svg"}},
            {"task": "convert", "input": {"files": "logo/logo.png"}, "output": {"format": "ico"}, "options": {"sizes": [16]}},
            {"task": "package", "input": {"files": "logo/*.ico"}, "output": {"dir": "dist", "files": "icons.zip"}},
        ],
        docs=[
            {
                "doc": "README.md",
                "title": "Widgets",
                "sections": [
                    {"type": "toc", "title": "Contents"},
                    {
                        "type": "asset-feature",
                        "title": "Assets",
                        "dir": "logo",
                        "files": [["*.png", "*.min.svg"], "*.ico"],
                        "preview": "*.png",
                        "titles": {"logo.png": "Logo"},
                    },
                ],
            }
        ],
    )

    result = Brander(config).generate()

    assert [stage.name for stage in result.stage_results] == ["assets", "docs"]
    assert [stage.contexts for stage in result.stage_results] == [3, 1]
    assert (assets_dir / "logo" / "logo.min.svg").exists()
    assert Size.from_image(assets_dir / "logo" / "logo-16x16.ico") == [Size(16, 16)]
    assert (assets_dir / "dist" / "icons.zip").exists()
    assert len(list(config.scope.tasks)) == 3

    content = (tmp_path / "docs" / "README.md").read_text()
    assert content.startswith("# Widgets\n\n## Contents\n")
    assert "1. [Contents](docs/README.md)\n2. [Assets](docs/README.md)\n    1. [Logo](docs/README.md)" in content
    assert "### Logo\n" in content
    assert "[![logo.png](assets/logo/logo.png)](assets/logo)" in content
    assert "| image/png | [64x64](assets/logo/logo.png) | [logo.min.svg](assets/logo/logo.min.svg) |" in content
    assert "[16x16](assets/logo/logo-16x16.ico)" in content
    assert result.documents == [content + "\n"]


def test_generate_clears_scope_and_can_skip_stages(make_config, assets_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
    (assets_dir / "logo.svg").write_text(ICON_SVG)
    config = make_config(tasks=[{"task": "optimize", "input": {"files": "logo.svg"}}])
    config.scope.attributes["stale"] = True
    brander = Brander(config)

    result = brander.generate(skip_docs=True)

    assert "stale" not in config.scope.attributes
    assert [stage.name for stage in result.stage_results] == ["assets"]

    with caplog.at_level(logging.WARNING, logger="brander"):
        assert brander.generate(skip_assets=True, skip_docs=True).stage_results == []
    assert "Nothing to do" in caplog.text


def test_generate_uses_given_services(make_config, assets_dir: Path) -> None:
    (assets_dir / "logo.svg").write_text(ICON_SVG)
    service = TaskService()
    service.clear()
    config = make_config(tasks=[{"task": "optimize", "input": {"files": "logo.svg"}}])

    with pytest.raises(DispatchError):
        Brander(config, task_service=service).generate(skip_docs=True)


def test_cli_generate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".branderrc.yaml").write_text(CONFIG_YAML)
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.svg").write_text(ICON_SVG)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(app, ["generate", "--quiet"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "assets" / "logo.min.svg").exists()
    assert (tmp_path / "docs" / "README.md").read_text().startswith("widgets\n")


def test_cli_generate_only_docs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".branderrc.yaml").write_text(CONFIG_YAML)
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.svg").write_text(ICON_SVG)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(app, ["generate", "--only-docs", "--quiet"])

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "assets" / "logo.min.svg").exists()
    assert (tmp_path / "docs" / "README.md").exists()


def test_cli_reports_configuration_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "broken.yaml").write_text("tasks:\n  - task: optimize\n    input: {}\nrepository: github:a/b\n")
    (tmp_path / "assets").mkdir()
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(app, ["generate", "--config", "broken.yaml", "--quiet"])

    assert result.exit_code == 1
    assert '"input" configuration is required' in result.output


def test_cli_lists_handlers_and_version() -> None:
    runner = CliRunner()

    handlers = runner.invoke(app, ["handlers"])
    version = runner.invoke(app, ["--version"])

    assert handlers.exit_code == 0
    assert "ConvertSvgToPngTask" in handlers.output
    assert "asset-feature" in handlers.output
    assert version.exit_code == 0
    assert version.output.startswith("brander ")
