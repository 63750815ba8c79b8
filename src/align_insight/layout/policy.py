"""Ignore policy and report queries.

Ignored structs are listed like any other but never count as problems.
Unchecked structs are not problems either; they are reported separately.
"""

from typing import List, Optional, Tuple

from .models import Package, Record, Report


def record_has_problems(record: Record) -> bool:
    """True if the struct's field order can be improved and is not ignored."""
    return not record.ignore and record.can_be_optimized


def package_has_problems(pkg: Package) -> bool:
    return any(record_has_problems(r) for r in pkg.records)


def report_has_problems(report: Report) -> bool:
    return any(package_has_problems(p) for p in report.packages)


def problem_records(report: Report) -> List[Tuple[Package, Record]]:
    return [(pkg, rec) for pkg, rec in report.iter_records() if record_has_problems(rec)]


def unchecked_records(report: Report) -> List[Tuple[Package, Record]]:
    return [(pkg, rec) for pkg, rec in report.iter_records() if not rec.checked]


def find_record(report: Report, name: str) -> Optional[Tuple[Package, Record]]:
    """First struct called ``name`` in report order."""
    for pkg, rec in report.iter_records():
        if rec.name == name:
            return pkg, rec
    return None


def filter_report(report: Report, name: str) -> Report:
    """Report restricted to structs called ``name`` (empty packages dropped)."""
    packages = []
    for pkg in report.packages:
        matching = tuple(r for r in pkg.records if r.name == name)
        if matching:
            packages.append(Package(path=pkg.path, records=matching))
    return Report.of(packages)


def problems_only(report: Report) -> Report:
    """Report restricted to structs with problems (empty packages dropped)."""
    packages = []
    for pkg in report.packages:
        matching = tuple(r for r in pkg.records if record_has_problems(r))
        if matching:
            packages.append(Package(path=pkg.path, records=matching))
    return Report.of(packages)
