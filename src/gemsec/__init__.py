"""Static pattern-matching security scanner for JavaScript/TypeScript."""

from .engine import RuleEvaluationError, analyze_content, analyze_file, analyze_files
from .aggregator import summarize_scan
from .rules import DEFAULT_RULES, Rule

__all__ = [
    "DEFAULT_RULES",
    "Rule",
    "RuleEvaluationError",
    "analyze_content",
    "analyze_file",
    "analyze_files",
    "summarize_scan",
]
