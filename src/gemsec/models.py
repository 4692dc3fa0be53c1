"""Pydantic models for the gemsec pattern scanner."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity levels for findings."""

    critical = "critical"
    high = "high"
    medium = "medium"
    low = "low"


# Explicit ordinal, lower sorts first
SEVERITY_ORDER: dict[str, int] = {
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
}


def severity_rank(severity: Severity | str) -> int:
    """Return the sort rank for a severity (critical=0 ... low=3)."""
    value = severity.value if isinstance(severity, Severity) else str(severity).lower()
    return SEVERITY_ORDER[value]


class Finding(BaseModel):
    """One rule match that survived lexical suppression."""

    severity: Severity = Field(description="Severity copied from the rule")
    rule_name: str = Field(description="Name of the rule that matched")
    line: int = Field(ge=1, description="1-based line where the match starts")
    matched_line_text: str = Field(description="Trimmed content of the matched line")
    context_snippet: str = Field(description="Numbered lines around the match, '>' marks the hit")
    message: str = Field(description="Description of the risk")
    recommendation: str = Field(description="Suggested remediation")
    explanation: Optional[str] = Field(default=None, description="Extended rationale, if the rule has one")


class SeveritySummary(BaseModel):
    """Finding counts by severity."""

    critical: int = Field(default=0, description="Number of critical findings")
    high: int = Field(default=0, description="Number of high findings")
    medium: int = Field(default=0, description="Number of medium findings")
    low: int = Field(default=0, description="Number of low findings")


class FileResult(BaseModel):
    """All findings for a single analyzed file."""

    file_path: str = Field(description="File identifier as supplied by the caller")
    findings: list[Finding] = Field(
        default_factory=list, description="Findings in discovery order (rule order, then match order)"
    )
    summary: SeveritySummary = Field(default_factory=SeveritySummary, description="Counts by severity")


class FileError(BaseModel):
    """A file that could not be analyzed during a batch scan."""

    file_path: str = Field(description="File identifier")
    error: str = Field(description="Error message")


class ScanResult(BaseModel):
    """Results across a multi-file scan."""

    files: list[FileResult] = Field(
        default_factory=list, description="One entry per file with at least one finding"
    )
    errors: list[FileError] = Field(
        default_factory=list, description="Files skipped because analysis failed"
    )


class ScanTotals(BaseModel):
    """Scan-level summary statistics."""

    files_analyzed: int = Field(default=0, description="Number of file results summarized")
    total_findings: int = Field(default=0, description="Total number of findings")
    critical: int = Field(default=0, description="Number of critical findings")
    high: int = Field(default=0, description="Number of high findings")
    medium: int = Field(default=0, description="Number of medium findings")
    low: int = Field(default=0, description="Number of low findings")


class HtmlReport(BaseModel):
    """Locations of a generated HTML report."""

    directory: str = Field(description="Report directory")
    html_path: str = Field(description="Path to index.html")
    css_path: str = Field(description="Path to styles.css")


class AnalysisResponse(BaseModel):
    """Output of an analysis tool call."""

    report: str = Field(description="Plain-text report")
    html_path: Optional[str] = Field(default=None, description="Generated HTML report, if any")
    opened_in_browser: bool = Field(default=False, description="Whether the report was launched")
    results: list[FileResult] = Field(default_factory=list, description="Per-file results")
    totals: ScanTotals = Field(default_factory=ScanTotals, description="Scan-level totals")
    errors: list[FileError] = Field(default_factory=list, description="Files that failed analysis")


class SourceFile(BaseModel):
    """File content supplied directly by a remote caller."""

    path: str = Field(description="File path, relative to the directory or absolute")
    content: str = Field(description="File content")


class AnalyzeFileRequest(BaseModel):
    """Request body for analyzing one file."""

    file_path: str = Field(description="Path of the file, used for reporting and local access")
    file_content: Optional[str] = Field(
        default=None, description="File content; when set the file is not read from disk"
    )


class AnalyzeDirectoryRequest(BaseModel):
    """Request body for analyzing a directory."""

    directory_path: str = Field(description="Directory path, used for reporting and local access")
    files: Optional[list[SourceFile]] = Field(
        default=None, description="File contents; when set the directory is not walked"
    )
