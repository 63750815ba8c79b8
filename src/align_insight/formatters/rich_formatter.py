"""Rich terminal formatter for align-insight."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from ..abi import AbiContext
from ..layout import (
    Field,
    Package,
    Record,
    Report,
    annotate_layout,
    find_record,
    package_has_problems,
    record_has_problems,
)
from ..models import AnalysisContext
from .base import BaseFormatter

# Longer type names are shortened with an ellipsis
MAX_TYPE_SIZE = 32

# Fields larger than this are summarised instead of drawn byte by byte
MAX_MAP_BYTES = 64

_USED = "[green]■[/green]"
_PADDING = "[red]□[/red]"
_TRAILING = "[yellow]□[/yellow]"


def _ellipsis(text: str, size: int = MAX_TYPE_SIZE) -> str:
    if len(text) <= size:
        return text
    return text[: size - 1] + "…"


def _tag(field: Field) -> str:
    return f"`{field.tag}`" if field.tag else ""


class RichFormatter(BaseFormatter):
    """Struct listings in Go syntax, with optional byte maps."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: Report, context: AnalysisContext) -> None:
        if report.is_empty():
            self.console.print("[yellow]Given package doesn't have any structs[/yellow]")
            return

        if context.struct_name:
            self._print_struct(report, context)
        elif context.checking:
            self._print_check(report, context)
        else:
            self._print_full(report, context)

    def format(self, report: Report, context: AnalysisContext) -> str:
        console = Console(width=120, no_color=True, highlight=False)
        with console.capture() as capture:
            RichFormatter(console).render(report, context)
        return capture.get()

    # -- commands --

    def _print_full(self, report: Report, context: AnalysisContext) -> None:
        for pkg in report.non_empty_packages():
            self.console.print(Rule(escape(pkg.path), align="left"))
            for record in pkg.records:
                self._print_record(record, context.abi, detailed=True, optimal=False)
        self.console.print(Rule())

    def _print_check(self, report: Report, context: AnalysisContext) -> None:
        problems = [pkg for pkg in report.non_empty_packages() if package_has_problems(pkg)]

        if not problems:
            self.console.print("[green]All structs are well aligned[/green]")
            return

        for pkg in problems:
            self._print_package_problems(pkg, context)
        self.console.print(Rule())

    def _print_struct(self, report: Report, context: AnalysisContext) -> None:
        found = find_record(report, context.struct_name)
        if found is None:
            self.console.print(
                f"[yellow]Can't find struct with name [bold]{escape(context.struct_name)}"
                "[/bold][/yellow]"
            )
            return

        pkg, record = found
        self.console.print(Rule(escape(pkg.path), align="left"))
        if context.checking and not record_has_problems(record):
            self._print_already_optimal(record)
        else:
            self._print_record(
                record, context.abi, detailed=context.detailed, optimal=context.checking
            )
        self.console.print(Rule())

    # -- pieces --

    def _print_package_problems(self, pkg: Package, context: AnalysisContext) -> None:
        self.console.print(Rule(escape(pkg.path), align="left"))
        for record in pkg.records:
            if record_has_problems(record):
                self._print_record(record, context.abi, detailed=context.detailed, optimal=True)

    def _print_already_optimal(self, record: Record) -> None:
        if not record.checked:
            self._print_header(record, optimal=False)
            return
        state = "ignored" if record.ignore and record.can_be_optimized else "already optimal"
        self.console.print(
            f"Struct [bold]{escape(record.name)}[/bold] [dim]({record.position})[/dim] "
            f"is {state} [dim](size {record.size})[/dim]\n"
        )

    def _print_header(self, record: Record, optimal: bool) -> None:
        if optimal:
            self.console.print(
                f"Struct [bold]{escape(record.name)}[/bold] [dim]({record.position})[/dim] "
                f"fields order can be optimized ({record.size} → {record.optimal_size})\n"
            )
            return

        if not record.checked:
            self.console.print(
                f"[dim]// {record.position} | Size: unknown "
                f"({escape(record.reason or 'layout could not be determined')})[/dim]"
            )
            return

        suffix = " | ignored" if record.ignore else ""
        self.console.print(
            f"[dim]// {record.position} | Size: {record.size} "
            f"(Optimal: {record.optimal_size}){suffix}[/dim]"
        )

    def _print_record(
        self, record: Record, abi: AbiContext, detailed: bool, optimal: bool
    ) -> None:
        self._print_header(record, optimal)
        self.console.print(f"type [bold]{escape(record.name)}[/bold] struct {{")

        fields: Sequence[Field] = record.fields
        if optimal and record.optimized_fields is not None:
            fields = record.optimized_fields

        if detailed and record.checked:
            self._print_detailed_fields(fields, abi)
        else:
            self._print_simple_fields(fields)

        self.console.print("}\n")

    def _print_simple_fields(self, fields: Sequence[Field]) -> None:
        name_width = max((len(f.name) for f in fields), default=0)
        type_width = max((len(_ellipsis(f.type_descriptor)) for f in fields), default=0)
        for f in fields:
            line = f"  {escape(f.name.ljust(name_width))} "
            tag = _tag(f)
            if tag:
                line += f"[bold]{escape(_ellipsis(f.type_descriptor).ljust(type_width))}[/bold] "
                line += f"[yellow]{escape(tag)}[/yellow]"
            else:
                line += f"[bold]{escape(_ellipsis(f.type_descriptor))}[/bold]"
            self.console.print(line)

    def _print_detailed_fields(self, fields: Sequence[Field], abi: AbiContext) -> None:
        layout = annotate_layout(fields, abi)
        row = abi.max_align

        name_width = max((len(f.name) for f in fields), default=0)
        type_width = max((len(_ellipsis(f.type_descriptor)) for f in fields), default=0)
        tag_width = max((len(_tag(f)) for f in fields), default=0)
        label_width = 2 + name_width + 1 + type_width + (1 + tag_width if tag_width else 0)

        for index, slot in enumerate(layout.slots):
            f = slot.field
            label = (
                f"  {escape(f.name.ljust(name_width))} "
                f"[bold]{escape(_ellipsis(f.type_descriptor).ljust(type_width))}[/bold]"
            )
            if tag_width:
                label += f" [yellow]{escape(_tag(f).ljust(tag_width))}[/yellow]"

            if index + 1 < len(layout.slots):
                pad_after, pad_cell = layout.slots[index + 1].padding_before, _PADDING
            else:
                pad_after, pad_cell = layout.trailing_padding, _TRAILING

            cells = self._cells(f.size or 0, pad_after, pad_cell)
            lines = self._wrap(cells, slot.offset % row, row, label, label_width)
            for line in lines:
                self.console.print(line)

    @staticmethod
    def _cells(size: int, pad_after: int, pad_cell: str) -> List[str]:
        if size > MAX_MAP_BYTES:
            shown = [_USED] * MAX_MAP_BYTES
            return shown + [f"[dim]… +{size - MAX_MAP_BYTES} bytes[/dim]"] + [pad_cell] * pad_after
        return [_USED] * size + [pad_cell] * pad_after

    @staticmethod
    def _wrap(cells: List[str], column: int, row: int, label: str, label_width: int):
        """Lay cells out in rows of ``row`` bytes, continuing from ``column``."""
        lines: List[str] = []
        current = label + "  " + "  " * column
        for cell in cells:
            if cell.startswith("[dim]"):
                current += cell + " "
                continue
            if column == row:
                lines.append(current.rstrip())
                current = " " * label_width + "  "
                column = 0
            current += cell + " "
            column += 1
        lines.append(current.rstrip())
        return lines
