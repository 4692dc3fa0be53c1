"""Plain-text security report."""

from ..aggregator import sort_findings, summarize_scan
from ..models import FileResult, Finding

SEVERITY_ICONS = {
    "critical": "🔴",
    "high": "🟠",
    "medium": "🟡",
    "low": "🟢",
}

_RULE = "=" * 60


def severity_icon(severity: str) -> str:
    return SEVERITY_ICONS.get(severity, "⚪")


def build_file_url(file_path: str, line: int) -> str:
    """Editor deep link for a finding. Only spaces and '#' are encoded."""
    encoded = file_path.replace(" ", "%20").replace("#", "%23")
    return f"vscode://file/{encoded}:{line}"


def build_debug_prompt(file_path: str, finding: Finding, context: str | None = None) -> str:
    """Prompt for fixing a finding. ``context`` is embedded when the snippet is not shown beside it."""
    head = (
        f'Investigate {finding.severity.value.upper()} issue "{finding.rule_name}" in {file_path} '
        f"line {finding.line}."
    )
    if context is None:
        body = " Use the snippet above to add a secure fix"
    else:
        body = f" Context:\n{context}\nAdd a secure fix"
    return f"{head}{body} that addresses: {finding.message} and apply: {finding.recommendation}"


def format_text_report(results: list[FileResult]) -> str:
    """Render results as a text report, findings sorted by severity per file."""
    totals = summarize_scan(results)

    parts = [
        "🔒 SECURITY CODE ANALYSIS REPORT",
        _RULE,
        "",
        "📊 SUMMARY:",
        f"   Total Files Analyzed: {totals.files_analyzed}",
        f"   Total Issues: {totals.total_findings}",
        f"   🔴 Critical: {totals.critical}",
        f"   🟠 High: {totals.high}",
        f"   🟡 Medium: {totals.medium}",
        f"   🟢 Low: {totals.low}",
        "",
    ]

    for result in results:
        if not result.findings:
            continue

        parts.extend(["", _RULE, f"📄 FILE: {result.file_path}", _RULE, ""])

        for finding in sort_findings(result.findings):
            severity = finding.severity.value
            parts.extend([
                f"{severity_icon(severity)} [{severity.upper()}] {finding.rule_name}",
                f"   Line: {finding.line}",
                f"   Code: {finding.matched_line_text}",
                f"   ⚠️  {finding.message}",
                f"   ✅ {finding.recommendation}",
            ])
            if finding.explanation:
                parts.append(f"   ℹ️  {finding.explanation}")
            parts.extend([
                "   📄 Context:",
                finding.context_snippet,
                f"   🔗 Open: {build_file_url(result.file_path, finding.line)}",
                f"   💡 Debug Prompt: {build_debug_prompt(result.file_path, finding)}",
                "",
            ])

    return "\n".join(parts) + "\n"
