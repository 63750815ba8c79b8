"""Layout simulation, field order optimization and report building."""

from .builder import build_package, build_record, build_report
from .calculator import (
    FieldSlot,
    LayoutMap,
    annotate_layout,
    compute_layout,
    effective_alignment,
)
from .models import Field, Package, Position, RawPackage, RawRecord, Record, Report
from .optimizer import compare_fields, optimal_size, optimize
from .policy import (
    filter_report,
    find_record,
    package_has_problems,
    problem_records,
    problems_only,
    record_has_problems,
    report_has_problems,
    unchecked_records,
)

__all__ = [
    "Field",
    "Position",
    "RawRecord",
    "RawPackage",
    "Record",
    "Package",
    "Report",
    "FieldSlot",
    "LayoutMap",
    "compute_layout",
    "annotate_layout",
    "effective_alignment",
    "compare_fields",
    "optimize",
    "optimal_size",
    "build_record",
    "build_package",
    "build_report",
    "record_has_problems",
    "package_has_problems",
    "report_has_problems",
    "problem_records",
    "unchecked_records",
    "find_record",
    "filter_report",
    "problems_only",
]
