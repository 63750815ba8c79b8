"""Output formatters for align-insight."""

from typing import Optional

from rich.console import Console

from .base import BaseFormatter
from .github_formatter import GithubFormatter
from .json_formatter import JsonFormatter
from .quiet_formatter import QuietFormatter
from .rich_formatter import RichFormatter

FORMATTERS = ("rich", "json", "github", "quiet")


def get_formatter(name: str, console: Optional[Console] = None) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "github", "quiet"
        console: Console used by the rich formatter

    Raises:
        ValueError: If name is not recognized
    """
    if name == "rich":
        return RichFormatter(console)

    formatters = {
        "json": JsonFormatter,
        "github": GithubFormatter,
        "quiet": QuietFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "GithubFormatter",
    "QuietFormatter",
    "FORMATTERS",
    "get_formatter",
]
