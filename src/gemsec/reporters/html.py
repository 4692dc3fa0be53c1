"""Standalone HTML security report."""

import logging
import webbrowser
from datetime import datetime
from html import escape
from pathlib import Path

from ..aggregator import sort_findings, summarize_scan
from ..config import TOOL_NAME
from ..models import FileResult, Finding, HtmlReport, ScanTotals
from .text import build_debug_prompt, build_file_url, severity_icon

logger = logging.getLogger(__name__)

REPORT_CSS = """
:root {
  font-family: "Inter", system-ui, -apple-system, "Segoe UI", sans-serif;
  color: #0f172a;
  background: #f8fafc;
}
body {
  margin: 0;
  background: linear-gradient(120deg, #0f172a 0%, #1d4ed8 100%);
  min-height: 100vh;
  padding: 2rem;
  box-sizing: border-box;
}
.hero {
  background: rgba(15, 23, 42, 0.85);
  color: #fff;
  padding: 2rem;
  border-radius: 24px;
  margin-bottom: 2rem;
}
.eyebrow { text-transform: uppercase; letter-spacing: 0.2em; font-size: 0.75rem; margin: 0; color: #93c5fd; }
.hero h1 { margin: 0.25rem 0 0.5rem; font-size: 2.5rem; }
.subtitle { margin: 0; color: #cbd5f5; }
.summary-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(150px, 1fr));
  gap: 1rem;
  margin-top: 2rem;
}
.summary-card {
  background: rgba(255, 255, 255, 0.1);
  padding: 1rem;
  border-radius: 16px;
  border: 1px solid rgba(255, 255, 255, 0.2);
}
.summary-card p { margin: 0.25rem 0; color: #cbd5f5; }
.summary-card strong { font-size: 1.5rem; color: #fff; }
main { display: flex; flex-direction: column; gap: 1.5rem; }
.file-section { background: #fff; border-radius: 20px; padding: 1.75rem; }
.file-header {
  display: flex;
  flex-wrap: wrap;
  gap: 1rem;
  justify-content: space-between;
  align-items: center;
  border-bottom: 1px solid #e2e8f0;
  padding-bottom: 1rem;
  margin-bottom: 1rem;
}
.file-header h2 { margin: 0; font-size: 1.25rem; }
.file-stats span { margin-left: 0.5rem; font-weight: 600; }
.issue-card { border: 1px solid #e2e8f0; border-radius: 16px; padding: 1rem; margin-bottom: 1rem; background: #f8fafc; }
.issue-card h3 { margin: 0; }
.severity-tag { border-radius: 999px; padding: 0.25rem 0.75rem; font-size: 0.85rem; font-weight: 600; color: #fff; }
.severity-critical .severity-tag { background: #ef4444; }
.severity-high .severity-tag { background: #f97316; }
.severity-medium .severity-tag { background: #eab308; }
.severity-low .severity-tag { background: #22c55e; }
.issue-card ul { list-style: none; padding: 0; margin: 0.75rem 0; display: flex; gap: 1.5rem; flex-wrap: wrap; }
.section-title { margin: 0 0 0.35rem; font-size: 0.85rem; text-transform: uppercase; color: #475569; }
code, pre { font-family: "JetBrains Mono", "Fira Code", monospace; }
pre { background: #0f172a; color: #f8fafc; padding: 0.75rem; border-radius: 12px; overflow-x: auto; font-size: 0.85rem; }
.no-issues { margin: 0; padding: 1rem; background: #ecfccb; border-radius: 12px; color: #365314; font-weight: 600; }
@media (max-width: 768px) {
  body { padding: 1rem; }
  .file-header { flex-direction: column; align-items: flex-start; }
}
"""


def _render_finding(file_path: str, finding: Finding) -> str:
    severity = finding.severity.value
    explanation = (
        f'<p class="issue-explanation">ℹ️ {escape(finding.explanation)}</p>' if finding.explanation else ""
    )
    return f"""
      <article class="issue-card severity-{severity}">
        <header>
          <span class="severity-tag">{severity_icon(severity)} {severity.upper()}</span>
          <h3>{escape(finding.rule_name)}</h3>
        </header>
        <ul>
          <li><strong>Line:</strong> {finding.line}</li>
          <li><strong>Code:</strong> <code>{escape(finding.matched_line_text)}</code></li>
          <li><strong>Open:</strong> <a href="{escape(build_file_url(file_path, finding.line))}">vscode://</a></li>
        </ul>
        <div class="issue-context">
          <p class="section-title">Code snippet</p>
          <pre><code>{escape(finding.context_snippet)}</code></pre>
        </div>
        <p class="issue-message">⚠️ {escape(finding.message)}</p>
        <p class="issue-recommendation">✅ {escape(finding.recommendation)}</p>
        {explanation}
        <div class="issue-debug">
          <p class="section-title">🧠 Debug prompt</p>
          <pre>{escape(build_debug_prompt(file_path, finding, context=finding.context_snippet))}</pre>
        </div>
      </article>"""


def _render_file(result: FileResult) -> str:
    if result.findings:
        issues = "".join(_render_finding(result.file_path, f) for f in sort_findings(result.findings))
    else:
        issues = '<p class="no-issues">No security issues detected.</p>'

    s = result.summary
    return f"""
    <section class="file-section">
      <div class="file-header">
        <h2>{escape(result.file_path)}</h2>
        <div class="file-stats">
          <span>🔴 {s.critical}</span>
          <span>🟠 {s.high}</span>
          <span>🟡 {s.medium}</span>
          <span>🟢 {s.low}</span>
        </div>
      </div>
      {issues}
    </section>"""


def build_html_document(results: list[FileResult], totals: ScanTotals, generated_at: str) -> str:
    if results:
        sections = "".join(_render_file(r) for r in results)
    else:
        sections = """
    <section class="file-section">
      <p class="no-issues">No security issues detected in the analyzed scope.</p>
    </section>"""

    cards = [
        ("📁", "Files analyzed", totals.files_analyzed),
        ("⚠️", "Total issues", totals.total_findings),
        ("🔴", "Critical", totals.critical),
        ("🟠", "High", totals.high),
        ("🟡", "Medium", totals.medium),
        ("🟢", "Low", totals.low),
    ]
    summary = "".join(
        f"""
        <div class="summary-card"><span>{icon}</span><p>{label}</p><strong>{value}</strong></div>"""
        for icon, label, value in cards
    )

    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{TOOL_NAME} Security Report</title>
    <link rel="stylesheet" href="styles.css" />
  </head>
  <body>
    <header class="hero">
      <div>
        <p class="eyebrow">{TOOL_NAME} MCP</p>
        <h1>{TOOL_NAME} Code Analysis Report</h1>
        <p class="subtitle">Generated at {escape(generated_at)}</p>
      </div>
      <div class="summary-grid">{summary}
      </div>
    </header>
    <main>{sections}
    </main>
  </body>
</html>
"""


def generate_html_report(
    results: list[FileResult],
    output_root: str | Path | None = None,
) -> HtmlReport:
    """Write ``index.html`` and ``styles.css`` into a timestamped report directory.

    Args:
        results: Per-file results to render.
        output_root: Parent directory for the report; defaults to ./reports.
    """
    timestamp = datetime.now()
    slug = timestamp.strftime("%Y-%m-%dT%H-%M-%S-%f")
    root = Path(output_root) if output_root else Path.cwd() / "reports"
    report_dir = root / f"security-report-{slug}"
    report_dir.mkdir(parents=True, exist_ok=True)

    html_path = report_dir / "index.html"
    css_path = report_dir / "styles.css"
    html_path.write_text(
        build_html_document(results, summarize_scan(results), timestamp.strftime("%Y-%m-%d %H:%M:%S")),
        encoding="utf-8",
    )
    css_path.write_text(REPORT_CSS, encoding="utf-8")

    logger.info(f"HTML report written to {html_path}")
    return HtmlReport(directory=str(report_dir), html_path=str(html_path), css_path=str(css_path))


def open_in_browser(path: str | Path) -> bool:
    """Open a report in the default browser. Failures are logged, never raised."""
    absolute = Path(path).resolve()
    try:
        opened = webbrowser.open(absolute.as_uri())
    except webbrowser.Error as e:
        logger.warning(f"Failed to open browser automatically: {e}. You can manually open: {absolute}")
        return False

    if opened:
        logger.info(f"Opened report in browser: {absolute}")
    else:
        logger.warning(f"No browser available. You can manually open: {absolute}")
    return opened
