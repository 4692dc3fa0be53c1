"""Tests for text and HTML reporters."""

import webbrowser
from pathlib import Path

from gemsec.engine import analyze_content
from gemsec.models import FileResult, Finding, Severity
from gemsec.reporters import format_text_report, generate_html_report, open_in_browser
from gemsec.reporters.text import build_debug_prompt, build_file_url
from gemsec.rules import get_rules


def _finding(severity: Severity, rule_name: str, line: int = 1, **kwargs) -> Finding:
    return Finding(
        severity=severity,
        rule_name=rule_name,
        line=line,
        matched_line_text=kwargs.get("matched_line_text", "x"),
        context_snippet=kwargs.get("context_snippet", ">    1 | x"),
        message="m",
        recommendation="r",
        explanation=kwargs.get("explanation"),
    )


class TestTextReport:
    """Test the plain-text report."""

    def test_summary_and_sections(self):
        """Test the report carries the summary and every finding field."""
        result = analyze_content("src/app.js", "const a = 1;\neval(a);", get_rules(["eval Usage"]))

        report = format_text_report([result])

        assert report.startswith("🔒 SECURITY CODE ANALYSIS REPORT")
        assert "   Total Files Analyzed: 1" in report
        assert "   Total Issues: 1" in report
        assert "📄 FILE: src/app.js" in report
        assert "🔴 [CRITICAL] eval Usage" in report
        assert "   Line: 2" in report
        assert "   Code: eval(a);" in report
        assert ">    2 | eval(a);" in report
        assert "   🔗 Open: vscode://file/src/app.js:2" in report
        assert "   💡 Debug Prompt: Investigate CRITICAL issue" in report

    def test_findings_sorted_by_severity(self):
        """Test critical findings are listed before low ones."""
        result = FileResult(
            file_path="a.js",
            findings=[
                _finding(Severity.low, "Low Rule"),
                _finding(Severity.critical, "Critical Rule"),
            ],
        )
        report = format_text_report([result])
        assert report.index("Critical Rule") < report.index("Low Rule")

    def test_explanation_included_when_present(self):
        """Test a rule explanation is printed."""
        result = FileResult(
            file_path="a.js",
            findings=[_finding(Severity.high, "Rule", explanation="Because attackers")],
        )
        assert "ℹ️  Because attackers" in format_text_report([result])

    def test_empty_results(self):
        """Test an empty scan prints only the summary."""
        report = format_text_report([])
        assert "   Total Files Analyzed: 0" in report
        assert "📄 FILE:" not in report

    def test_file_url_encoding(self):
        """Test spaces and hashes are encoded in editor links."""
        assert build_file_url("my dir/a#b.ts", 3) == "vscode://file/my%20dir/a%23b.ts:3"


class TestDebugPrompt:
    """Test debug prompt wording."""

    def test_refers_to_snippet_above(self):
        """Test the prompt without context points at the printed snippet."""
        prompt = build_debug_prompt("a.js", _finding(Severity.high, "Rule", line=4))
        assert prompt.startswith('Investigate HIGH issue "Rule" in a.js line 4.')
        assert "Use the snippet above" in prompt
        assert prompt.endswith("addresses: m and apply: r")

    def test_embeds_context(self):
        """Test the prompt with context embeds the snippet."""
        prompt = build_debug_prompt("a.js", _finding(Severity.high, "Rule"), context=">    1 | x")
        assert "Context:\n>    1 | x\n" in prompt
        assert "snippet above" not in prompt
        assert prompt.endswith("addresses: m and apply: r")


class TestHtmlReport:
    """Test the HTML report."""

    def test_writes_report_files(self, tmp_path: Path):
        """Test the page and stylesheet are written with escaped content."""
        result = FileResult(
            file_path="src/<script>.js",
            findings=[_finding(Severity.high, "Rule <b>", matched_line_text="<script>alert(1)</script>")],
        )

        report = generate_html_report([result], output_root=tmp_path)

        html_path = Path(report.html_path)
        assert html_path.is_file()
        assert Path(report.css_path).is_file()
        assert html_path.parent == Path(report.directory)
        assert html_path.parent.parent == tmp_path
        assert html_path.parent.name.startswith("security-report-")

        html = html_path.read_text(encoding="utf-8")
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "Rule &lt;b&gt;" in html
        assert 'href="styles.css"' in html
        assert "Context:\n&gt;    1 | x" in html

    def test_no_findings_message(self, tmp_path: Path):
        """Test an empty scan renders the no-issues message."""
        report = generate_html_report([], output_root=tmp_path)
        html = Path(report.html_path).read_text(encoding="utf-8")
        assert "No security issues detected in the analyzed scope." in html

    def test_reports_do_not_overwrite(self, tmp_path: Path):
        """Test each report gets its own directory."""
        first = generate_html_report([], output_root=tmp_path)
        second = generate_html_report([], output_root=tmp_path)
        assert first.directory != second.directory


class TestOpenInBrowser:
    """Test browser launching."""

    def test_reports_success(self, tmp_path: Path, monkeypatch):
        """Test a successful launch opens a file URI."""
        opened = []
        monkeypatch.setattr(webbrowser, "open", lambda uri: opened.append(uri) or True)

        assert open_in_browser(tmp_path / "index.html") is True
        assert opened[0].startswith("file://")

    def test_no_browser(self, tmp_path: Path, monkeypatch):
        """Test a missing browser returns False."""
        monkeypatch.setattr(webbrowser, "open", lambda uri: False)
        assert open_in_browser(tmp_path / "index.html") is False

    def test_browser_error_is_not_raised(self, tmp_path: Path, monkeypatch):
        """Test a browser error is logged, not raised."""
        def fail(uri):
            raise webbrowser.Error("no runnable browser")

        monkeypatch.setattr(webbrowser, "open", fail)
        assert open_in_browser(tmp_path / "index.html") is False
