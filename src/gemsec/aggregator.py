"""Scan-level aggregation of per-file results."""

from typing import Iterable

from .models import FileResult, Finding, ScanTotals, severity_rank


def summarize_scan(results: Iterable[FileResult]) -> ScanTotals:
    """Sum per-file severity summaries into scan totals."""
    totals = ScanTotals()
    for result in results:
        totals.files_analyzed += 1
        totals.total_findings += len(result.findings)
        totals.critical += result.summary.critical
        totals.high += result.summary.high
        totals.medium += result.summary.medium
        totals.low += result.summary.low
    return totals


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Return findings ordered critical first; ties keep discovery order."""
    return sorted(findings, key=lambda f: severity_rank(f.severity))
