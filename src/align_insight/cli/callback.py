"""Global options callback."""

from pathlib import Path
from typing import Optional

import typer

from ..logging_config import setup_logging
from . import app
from ._common import console


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colors in output",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers for struct analysis",
        min=1,
        max=32,
        hidden=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    View and check Go struct field alignment.

    Simulates the memory layout of every struct, including padding, and
    suggests a field order with minimal padding.

    [bold cyan]Examples:[/bold cyan]

      align-insight view .

      align-insight check ./...

      align-insight --no-color check --arch 386 ./pkg/...

      align-insight view -s PostMessageParameters .
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["no_color"] = no_color
    ctx.obj["config"] = config
    ctx.obj["workers"] = workers

    if no_color:
        console.no_color = True

    if version:
        from .. import __version__

        console.print(f"[bold cyan]align-insight[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    setup_logging("verbose" if verbose else "normal")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
