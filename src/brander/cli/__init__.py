"""Command-line interface bootstrap for Brander."""
from __future__ import annotations

import typer

from .. import __version__
from .commands.generate import generate
from .commands.handlers import handlers


app = typer.Typer(help="Generate brand assets and their documentation")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"brander {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", help="Show the version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """Brander command-line interface."""


app.command()(generate)
app.command()(handlers)

__all__ = ["app"]
