"""Quiet formatter - qualified struct names only."""

from ..layout import Report, record_has_problems
from ..models import AnalysisContext
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render ``package.Struct`` names, one per line."""

    def render(self, report: Report, context: AnalysisContext) -> None:
        text = self.format(report, context)
        if text:
            print(text)

    def format(self, report: Report, context: AnalysisContext) -> str:
        names = []
        for pkg, record in report.iter_records():
            if context.struct_name and record.name != context.struct_name:
                continue
            if context.checking and not record_has_problems(record):
                continue
            names.append(f"{pkg.path}.{record.name}")
        return "\n".join(names)
