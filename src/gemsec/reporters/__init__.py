"""Report renderers for scan results."""

from .html import generate_html_report, open_in_browser
from .text import format_text_report

__all__ = ["format_text_report", "generate_html_report", "open_in_browser"]
