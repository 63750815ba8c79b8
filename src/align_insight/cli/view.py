"""View command: print layout info for all structs."""

from typing import List, Optional

import click
import typer

from . import app
from ._common import FORMAT_HELP, run_command
from ..formatters import FORMATTERS


@app.command()
def view(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Packages to inspect (directories, files, dir/... or descriptor .json)",
    ),
    arch: Optional[str] = typer.Option(
        None,
        "--arch",
        "-a",
        help="Architecture name (default: host)",
    ),
    struct_name: Optional[str] = typer.Option(
        None,
        "--struct",
        "-s",
        help="Print info only about struct with given name",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Print detailed alignment info for --struct",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help=FORMAT_HELP,
        click_type=click.Choice(FORMATTERS, case_sensitive=False),
    ),
):
    """
    Print alignment info for all structs.

    [bold cyan]Examples:[/bold cyan]

      align-insight view .

      align-insight view -s Config -d ./internal/...
    """
    run_command(ctx, "view", paths, arch, struct_name, detailed, output_format.lower())
