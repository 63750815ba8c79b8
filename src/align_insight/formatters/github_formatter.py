"""GitHub Actions formatter - annotations and PR comment body."""

from typing import List

from ..layout import Report, problem_records, unchecked_records
from ..models import AnalysisContext
from .base import BaseFormatter


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions ``::warning`` annotations for misaligned structs.

    Also generates a Markdown summary suitable for ``gh pr comment``.
    """

    def render(self, report: Report, context: AnalysisContext) -> None:
        print(self.format(report, context))

    def format(self, report: Report, context: AnalysisContext) -> str:
        problems = problem_records(report)
        if context.struct_name:
            problems = [(p, r) for p, r in problems if r.name == context.struct_name]

        lines: List[str] = []
        for _pkg, rec in problems:
            lines.append(
                f"::warning file={rec.position.file},line={rec.position.line}::"
                f"Struct {rec.name} fields order can be optimized "
                f"({rec.size} → {rec.optimal_size})"
            )

        if not context.checking:
            for _pkg, rec in unchecked_records(report):
                lines.append(
                    f"::notice file={rec.position.file},line={rec.position.line}::"
                    f"Struct {rec.name} was not checked: {rec.reason}"
                )

        lines.append("")
        lines.append(f"## Struct alignment ({context.abi.name})")
        lines.append("")
        if not problems:
            lines.append("All structs are well aligned.")
            return "\n".join(lines)

        lines.append("| Package | Struct | Size | Optimal | Saved |")
        lines.append("|---------|--------|------|---------|-------|")
        for pkg, rec in problems:
            lines.append(
                f"| `{pkg.path}` | `{rec.name}` | {rec.size} | {rec.optimal_size} "
                f"| {rec.wasted_bytes} |"
            )
        lines.append("")
        total = sum(rec.wasted_bytes for _pkg, rec in problems)
        lines.append(f"**Summary:** {len(problems)} structs, {total} bytes of padding to recover")

        return "\n".join(lines)
