"""`brander generate` command implementation."""
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...brander import Brander
from ...config.loader import ConfigLoader
from ...errors import BranderError
from ...logging_utils import configure_logging

console = Console()


def generate(
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the configuration file. Defaults to the first .branderrc file in the current directory.",
        dir_okay=False,
    ),
    only_assets: bool = typer.Option(False, "--only-assets", help="Only generate assets."),
    only_docs: bool = typer.Option(False, "--only-docs", help="Only generate documentation."),
    debug: bool = typer.Option(False, "--debug", help="Log debug output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors."),
) -> None:
    """Generate assets and documentation from the configuration file."""
    if debug and quiet:
        raise typer.BadParameter("--debug and --quiet cannot be used together")
    if only_assets and only_docs:
        raise typer.BadParameter("--only-assets and --only-docs cannot be used together")
    configure_logging(level="DEBUG" if debug else "ERROR" if quiet else "INFO")

    try:
        loaded = ConfigLoader().load(config)
        result = Brander(loaded).generate(skip_assets=only_docs, skip_docs=only_assets)
    except BranderError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if quiet:
        return

    table = Table(title="Stages", show_header=True, header_style="bold green")
    table.add_column("Stage")
    table.add_column("Status")
    table.add_column("Contexts")
    table.add_column("Duration (s)")
    for stage in result.stage_results:
        table.add_row(stage.name, stage.status, str(stage.contexts), f"{stage.duration_seconds:.2f}")
    console.print(table)
