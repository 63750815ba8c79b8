"""JSON formatter for align-insight."""

import json

from ..layout import Report, filter_report, problems_only
from ..models import AnalysisContext
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report tree as JSON.

    ``check`` keeps only structs with problems; ``--struct`` keeps only the
    named struct.
    """

    def render(self, report: Report, context: AnalysisContext) -> None:
        print(self.format(report, context))

    def format(self, report: Report, context: AnalysisContext) -> str:
        if context.struct_name:
            report = filter_report(report, context.struct_name)
        if context.checking:
            report = problems_only(report)
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
