"""Data models shared by the CLI and formatters."""

from dataclasses import dataclass
from typing import Literal, Optional

from .abi import AbiContext

Command = Literal["view", "check"]


@dataclass
class AnalysisContext:
    """Context passed to formatters alongside the report."""

    abi: AbiContext
    command: Command = "view"
    detailed: bool = False
    struct_name: Optional[str] = None

    @property
    def checking(self) -> bool:
        return self.command == "check"
