from __future__ import annotations

import sys
import zipfile
from pathlib import Path

import pytest
from conftest import ICON_SVG, write_png

from brander.brander import Brander
from brander.errors import TaskExecutionError
from brander.size import Size
from brander.task.rasterizer import SvgRasterizer


def _cairosvg_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


requires_cairosvg = pytest.mark.skipif(not _cairosvg_available(), reason="CairoSVG or the Cairo library is unavailable")


def _generate_assets(config) -> None:
    Brander(config).generate(skip_docs=True)


def test_clean_removes_matching_files(make_config, assets_dir: Path) -> None:
    write_png(assets_dir / "old.png", (8, 8))
    keep = write_png(assets_dir / "keep.png", (8, 8))

    _generate_assets(make_config(tasks=[{"task": "clean", "input": {"files": "old.png"}}]))

    assert not (assets_dir / "old.png").exists()
    assert keep.exists()


def test_package_zip_stores_inputs_by_relative_path(make_config, assets_dir: Path) -> None:
    (assets_dir / "a.txt").write_text("a")
    (assets_dir / "sub").mkdir()
    (assets_dir / "sub" / "b.txt").write_text("b")

    _generate_assets(
        make_config(
            tasks=[
                {
                    "task": "package",
                    "input": {"files": ["*.txt", "sub/*.txt"]},
                    "output": {"files": "bundle.zip"},
                    "options": {"compression": 9},
                }
            ]
        )
    )

    with zipfile.ZipFile(assets_dir / "bundle.zip") as archive:
        assert sorted(archive.namelist()) == ["assets/a.txt", "assets/sub/b.txt"]
        assert archive.read("assets/sub/b.txt") == b"b"


def test_package_png_to_ico_holds_one_image_per_input(make_config, assets_dir: Path) -> None:
    for size in (16, 32, 48):
        write_png(assets_dir / f"icon-{size}.png", (size, size))

    _generate_assets(
        make_config(
            tasks=[{"task": "package", "input": {"files": "icon-*.png"}, "output": {"files": "favicon.ico"}}]
        )
    )

    assert Size.from_image(assets_dir / "favicon.ico") == [Size(16, 16), Size(32, 32), Size(48, 48)]


def test_package_png_to_ico_resizes_by_position(make_config, assets_dir: Path) -> None:
    write_png(assets_dir / "a.png", (64, 64))
    write_png(assets_dir / "b.png", (64, 64))

    _generate_assets(
        make_config(
            tasks=[
                {
                    "task": "package",
                    "input": {"files": "*.png"},
                    "output": {"files": "{{ file.base(true) }}-pack.ico"},
                    "options": {"sizes": [16, 24]},
                }
            ]
        )
    )

    assert Size.from_image(assets_dir / "a-pack.ico") == [Size(16, 16), Size(24, 24)]


def test_convert_png_to_ico_writes_one_file_per_size(make_config, assets_dir: Path) -> None:
    write_png(assets_dir / "logo.png", (64, 64))

    _generate_assets(
        make_config(
            tasks=[
                {
                    "task": "convert",
                    "input": {"files": "logo.png"},
                    "output": {"format": "ico", "dir": "icons"},
                    "options": {"sizes": ["16", 24]},
                }
            ]
        )
    )

    assert Size.from_image(assets_dir / "icons" / "logo-16x16.ico") == [Size(16, 16)]
    assert Size.from_image(assets_dir / "icons" / "logo-24x24.ico") == [Size(24, 24)]


def test_optimize_svg_writes_minified_copy(make_config, assets_dir: Path) -> None:
    (assets_dir / "logo.svg").write_text(ICON_SVG)

    _generate_assets(make_config(tasks=[{"task": "optimize", "input": {"files": "*.svg"}}]))

    output = (assets_dir / "logo.min.svg").read_text()
    assert output.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert "metadata" not in output
    assert "Generator" not in output
    assert "\n" not in output
    assert 'fill="red"' in output
    assert Size.from_image(assets_dir / "logo.min.svg") == [Size(32, 32)]


def test_rasterizer_reports_missing_cairosvg(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "cairosvg", None)
    rasterizer = SvgRasterizer("ConvertSvgToPngTask")

    with pytest.raises(TaskExecutionError, match="cairosvg is required"):
        rasterizer.convert(ICON_SVG.encode())


def test_closed_rasterizer_cannot_convert() -> None:
    rasterizer = SvgRasterizer("ConvertSvgToPngTask")
    rasterizer.close()

    with pytest.raises(TaskExecutionError, match="already been closed"):
        rasterizer.convert(ICON_SVG.encode())


@requires_cairosvg
def test_convert_svg_to_png_for_each_size(make_config, assets_dir: Path) -> None:
    (assets_dir / "icon.svg").write_text(ICON_SVG)

    _generate_assets(
        make_config(
            tasks=[
                {
                    "task": "convert",
                    "input": {"files": "icon.svg"},
                    "output": {"format": "png"},
                    "options": {"sizes": [16, 64]},
                }
            ]
        )
    )

    assert Size.from_image(assets_dir / "icon-16x16.png") == [Size(16, 16)]
    assert Size.from_image(assets_dir / "icon-64x64.png") == [Size(64, 64)]


@requires_cairosvg
def test_convert_svg_to_jpeg_without_sizes(make_config, assets_dir: Path) -> None:
    (assets_dir / "icon.svg").write_text(ICON_SVG)

    _generate_assets(
        make_config(
            tasks=[{"task": "convert", "input": {"files": "icon.svg"}, "output": {"format": "jpeg"}, "options": {"quality": 80}}]
        )
    )

    assert Size.from_image(assets_dir / "icon.jpeg") == [Size(32, 32)]


@requires_cairosvg
def test_package_svg_to_ico(make_config, assets_dir: Path) -> None:
    (assets_dir / "small.svg").write_text(ICON_SVG)
    (assets_dir / "large.svg").write_text(ICON_SVG)

    _generate_assets(
        make_config(
            tasks=[
                {
                    "task": "package",
                    "input": {"files": ["small.svg", "large.svg"]},
                    "output": {"files": "favicon.ico"},
                    "options": {"sizes": [16, 48]},
                }
            ]
        )
    )

    assert Size.from_image(assets_dir / "favicon.ico") == [Size(16, 16), Size(48, 48)]
