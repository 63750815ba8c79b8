"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="align-insight",
    help="align-insight - Go struct alignment viewer and checker",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .callback import main as _main_callback  # noqa: F401, E402
from .view import view as _view  # noqa: F401, E402
from .check import check as _check  # noqa: F401, E402


def main() -> None:
    """Console script entry point."""
    app()
