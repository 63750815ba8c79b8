"""Shared CLI helpers."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import AnalysisConfig, load_config
from ..core import LayoutAnalyzer
from ..exceptions import AlignInsightError
from ..formatters import FORMATTERS, get_formatter
from ..layout import Report, filter_report, report_has_problems
from ..logging_config import get_logger, setup_logging
from ..models import AnalysisContext, Command

console = Console()

FORMAT_HELP = f"Output format: {' | '.join(FORMATTERS)}"

logger = get_logger(__name__)


def resolve_config(
    ctx: typer.Context,
    arch: Optional[str] = None,
    detailed: bool = False,
) -> AnalysisConfig:
    """Build configuration from global and command options."""
    obj = ctx.obj or {}
    return load_config(
        config_file=obj.get("config"),
        arch=arch,
        workers=obj.get("workers"),
        detailed=True if detailed else None,
        color=False if obj.get("no_color") else None,
        verbose=obj.get("verbose", False),
    )


def run_command(
    ctx: typer.Context,
    command: Command,
    paths: Optional[List[str]],
    arch: Optional[str],
    struct_name: Optional[str],
    detailed: bool,
    output_format: str,
) -> Report:
    """Analyze ``paths`` and render the report; exits 1 on errors."""
    verbose = bool((ctx.obj or {}).get("verbose"))

    try:
        config = resolve_config(ctx, arch=arch, detailed=detailed)
        setup_logging(config.verbosity)
        if not config.color:
            console.no_color = True

        analyzer = LayoutAnalyzer(paths or ["."], config)
        report = analyzer.analyze()

        context = AnalysisContext(
            abi=analyzer.abi,
            command=command,
            detailed=config.detailed,
            struct_name=struct_name,
        )
        get_formatter(output_format, console).render(report, context)
        return report

    except typer.Exit:
        raise

    except AlignInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def exit_code_for(report: Report, command: Command, struct_name: Optional[str] = None) -> int:
    """``check`` fails when any non-ignored struct can be optimized."""
    if command != "check":
        return 0
    if struct_name:
        report = filter_report(report, struct_name)
    return 1 if report_has_problems(report) else 0
