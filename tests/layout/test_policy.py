"""Tests for layout/policy.py - ignore policy and report queries."""

from align_insight.layout import (
    Package,
    Position,
    Record,
    Report,
    filter_report,
    find_record,
    package_has_problems,
    problem_records,
    problems_only,
    record_has_problems,
    report_has_problems,
    unchecked_records,
)


def _record(name, size, optimal, ignore=False):
    return Record(
        name=name,
        position=Position("a.go", 1),
        fields=(),
        size=size,
        optimal_size=optimal,
        ignore=ignore,
        reason=None if size is not None else "unknown",
    )


def _report():
    return Report.of(
        [
            Package("example.com/a", (_record("Bad", 24, 16), _record("Good", 16, 16))),
            Package("example.com/b", (_record("Skipped", 24, 16, ignore=True),)),
            Package("example.com/c", (_record("Unknown", None, None), _record("Bad", 12, 8))),
        ]
    )


class TestProblems:
    """Test problem detection."""

    def test_optimizable_record_is_problem(self):
        assert record_has_problems(_record("Bad", 24, 16))

    def test_optimal_record_is_not_problem(self):
        assert not record_has_problems(_record("Good", 16, 16))

    def test_ignored_record_is_not_problem(self):
        assert not record_has_problems(_record("Skipped", 24, 16, ignore=True))

    def test_unchecked_record_is_not_problem(self):
        assert not record_has_problems(_record("Unknown", None, None))

    def test_package_and_report(self):
        report = _report()
        assert package_has_problems(report.packages[0])
        assert not package_has_problems(report.packages[1])
        assert report_has_problems(report)

    def test_report_without_problems(self):
        report = Report.of([Package("x", (_record("Good", 8, 8),))])
        assert not report_has_problems(report)

    def test_problem_records(self):
        found = [(p.path, r.name) for p, r in problem_records(_report())]
        assert found == [("example.com/a", "Bad"), ("example.com/c", "Bad")]

    def test_unchecked_records(self):
        found = [r.name for _, r in unchecked_records(_report())]
        assert found == ["Unknown"]


class TestQueries:
    """Test struct lookups and report filtering."""

    def test_find_record_returns_first(self):
        pkg, record = find_record(_report(), "Bad")
        assert pkg.path == "example.com/a"
        assert record.size == 24

    def test_find_record_missing(self):
        assert find_record(_report(), "Nope") is None

    def test_filter_report(self):
        filtered = filter_report(_report(), "Bad")
        assert [p.path for p in filtered.packages] == ["example.com/a", "example.com/c"]
        assert all(r.name == "Bad" for _, r in filtered.iter_records())

    def test_problems_only(self):
        filtered = problems_only(_report())
        assert [(p.path, r.name) for p, r in filtered.iter_records()] == [
            ("example.com/a", "Bad"),
            ("example.com/c", "Bad"),
        ]
