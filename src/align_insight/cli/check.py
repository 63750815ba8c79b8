"""Check command: report structs whose field order can be optimized."""

from typing import List, Optional

import click
import typer

from . import app
from ._common import FORMAT_HELP, exit_code_for, run_command
from ..formatters import FORMATTERS


@app.command()
def check(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Packages to check (directories, files, dir/... or descriptor .json)",
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
        help="Check only the struct with given name",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Print detailed alignment info",
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
    Check packages for alignment problems.

    Exits with status 1 when any struct (not marked with the ignore
    comment) can be made smaller by reordering its fields.

    [bold cyan]Examples:[/bold cyan]

      align-insight check ./...

      align-insight check --format github ./...
    """
    report = run_command(ctx, "check", paths, arch, struct_name, detailed, output_format.lower())
    code = exit_code_for(report, "check", struct_name)
    if code:
        raise typer.Exit(code)
