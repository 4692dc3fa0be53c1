"""Tests for scan-level aggregation."""

from gemsec.aggregator import sort_findings, summarize_scan
from gemsec.models import FileResult, Finding, Severity, SeveritySummary


def _finding(severity: Severity, line: int = 1) -> Finding:
    return Finding(
        severity=severity,
        rule_name=f"rule-{severity.value}",
        line=line,
        matched_line_text="x",
        context_snippet="",
        message="m",
        recommendation="r",
    )


class TestSummarizeScan:
    """Test scan totals."""

    def test_sums_file_summaries(self):
        """Test per-file summaries are added up."""
        results = [
            FileResult(
                file_path="a.js",
                findings=[_finding(Severity.critical), _finding(Severity.low)],
                summary=SeveritySummary(critical=1, low=1),
            ),
            FileResult(
                file_path="b.js",
                findings=[_finding(Severity.high)] * 3,
                summary=SeveritySummary(high=3),
            ),
        ]

        totals = summarize_scan(results)

        assert totals.files_analyzed == 2
        assert totals.total_findings == 5
        assert (totals.critical, totals.high, totals.medium, totals.low) == (1, 3, 0, 1)

    def test_empty_scan(self):
        """Test an empty scan has zero totals."""
        totals = summarize_scan([])
        assert totals.model_dump() == {
            "files_analyzed": 0,
            "total_findings": 0,
            "critical": 0,
            "high": 0,
            "medium": 0,
            "low": 0,
        }


class TestSortFindings:
    """Test severity ordering."""

    def test_orders_by_severity_and_keeps_ties_stable(self):
        """Test findings sort critical first and ties keep their order."""
        findings = [
            _finding(Severity.low, 1),
            _finding(Severity.high, 2),
            _finding(Severity.critical, 3),
            _finding(Severity.high, 4),
            _finding(Severity.medium, 5),
        ]
        ordered = sort_findings(findings)
        assert [f.line for f in ordered] == [3, 2, 4, 5, 1]

    def test_does_not_mutate_input(self):
        """Test sorting returns a new list."""
        findings = [_finding(Severity.low), _finding(Severity.critical)]
        sort_findings(findings)
        assert findings[0].severity == Severity.low
