"""Rule matching engine: source text + rules -> located findings."""

import logging
from pathlib import Path
from typing import Iterable, Sequence

from .lexical import LexicalClassifier
from .models import FileError, FileResult, Finding, ScanResult, Severity, SeveritySummary
from .rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)

CONTEXT_RADIUS = 2


class RuleEvaluationError(RuntimeError):
    """A rule's pattern failed while matching. This is a rule defect, not a file problem."""

    def __init__(self, rule_name: str, cause: Exception):
        super().__init__(f"Rule '{rule_name}' failed to evaluate: {cause}")
        self.rule_name = rule_name
        self.cause = cause


def build_context_snippet(lines: Sequence[str], line: int, radius: int = CONTEXT_RADIUS) -> str:
    """Render the lines around ``line`` (1-based), marking the match with '>'.

    The window is clamped to the file, so a match on the first or last line
    produces a shorter snippet rather than out-of-range lines.
    """
    start = max(0, line - 1 - radius)
    end = min(len(lines), line + radius)
    rendered = []
    for idx, content in enumerate(lines[start:end]):
        current = start + idx + 1
        prefix = ">" if current == line else " "
        rendered.append(f"{prefix} {current:>4} | {content}")
    return "\n".join(rendered)


def build_summary(findings: Iterable[Finding]) -> SeveritySummary:
    """Count findings by severity."""
    summary = SeveritySummary()
    for finding in findings:
        if finding.severity == Severity.critical:
            summary.critical += 1
        elif finding.severity == Severity.high:
            summary.high += 1
        elif finding.severity == Severity.medium:
            summary.medium += 1
        elif finding.severity == Severity.low:
            summary.low += 1
    return summary


def _find_all(rule: Rule, text: str):
    try:
        # Materialize so pattern errors surface here, not mid-report
        return list(rule.pattern.finditer(text))
    except Exception as e:
        raise RuleEvaluationError(rule.name, e) from e


def analyze_content(
    file_path: str,
    text: str,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> FileResult:
    """
    Apply every rule to ``text`` and collect the findings.

    Args:
        file_path: Identifier stamped on the result; never touched on disk.
        text: Full source text.
        rules: Rules to apply, in order.

    Returns:
        FileResult with findings in rule order, then match order.

    Raises:
        RuleEvaluationError: If a rule's pattern raises while matching.
    """
    findings: list[Finding] = []
    if not text:
        return FileResult(file_path=file_path, findings=findings, summary=build_summary(findings))

    lines = text.split("\n")
    classifier = LexicalClassifier(text)

    for rule in rules:
        for match in _find_all(rule, text):
            start = match.start()
            if start is None or start < 0:
                continue
            end = start + len(match.group(0))

            if classifier.is_suppressed(start, end):
                continue

            line = text.count("\n", 0, start) + 1
            findings.append(Finding(
                severity=rule.severity,
                rule_name=rule.name,
                line=line,
                matched_line_text=lines[line - 1].strip(),
                context_snippet=build_context_snippet(lines, line),
                message=rule.message,
                recommendation=rule.recommendation,
                explanation=rule.explanation,
            ))

    return FileResult(file_path=file_path, findings=findings, summary=build_summary(findings))


def analyze_file(
    file_path: str | Path,
    content: str | None = None,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> FileResult:
    """Analyze one file, reading it from disk unless ``content`` is supplied.

    Raises:
        ValueError: If the file does not exist and no content was given.
    """
    if content is None:
        path = Path(file_path)
        if not path.is_file():
            raise ValueError(f"File does not exist: {file_path}")
        content = path.read_text(encoding="utf-8", errors="ignore")
    return analyze_content(str(file_path), content, rules)


def analyze_files(
    files: Iterable[tuple[str, str]],
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> ScanResult:
    """
    Analyze many ``(identifier, text)`` pairs.

    Only files with at least one finding are kept. A failure on one file is
    logged and recorded in ``errors`` without stopping the scan; a rule
    failure is re-raised because it would affect every file.
    """
    result = ScanResult()

    for file_path, text in files:
        try:
            file_result = analyze_content(file_path, text, rules)
        except RuleEvaluationError:
            raise
        except Exception as e:
            logger.error(f"Error analyzing {file_path}: {e}")
            result.errors.append(FileError(file_path=file_path, error=str(e)))
            continue

        if file_result.findings:
            result.files.append(file_result)

    logger.info(
        f"Scan complete: {len(result.files)} file(s) with findings, {len(result.errors)} error(s)"
    )
    return result
