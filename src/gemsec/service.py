"""Analysis operations shared by the MCP, HTTP and sandbox entrypoints."""

import logging
from pathlib import Path
from typing import Any, Sequence

from .aggregator import summarize_scan
from .config import Settings, TOOL_NAME, get_settings
from .engine import analyze_file, analyze_files
from .file_walker import collect_source_files, resolve_project_root
from .models import AnalysisResponse, FileError, FileResult, SourceFile
from .reporters import format_text_report, generate_html_report, open_in_browser
from .rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)

BEST_PRACTICES = f"""
🔒 {TOOL_NAME.upper()} SECURITY BEST PRACTICES - Next.js/React Applications

1. 🛡️ INPUT VALIDATION & SANITIZATION
   - Validate all user input with zod, yup or joi
   - Sanitize HTML with DOMPurify before rendering
   - Rate limit API endpoints

2. 🔐 AUTHENTICATION & AUTHORIZATION
   - Use NextAuth.js or Auth0 for authentication
   - Keep tokens in httpOnly cookies, not localStorage
   - Implement proper session management
   - Give JWTs a sensible expiration time

3. 🌐 API SECURITY
   - Validate and sanitize every API input
   - Enable CSRF protection
   - Rate limit the API
   - Handle errors without exposing stack traces

4. 🔒 DATA PROTECTION
   - Encrypt sensitive data in transit (HTTPS) and at rest
   - Never hardcode secrets; use environment variables
   - Keep .env.local out of version control
   - Rotate secrets regularly

5. 🛡️ XSS PREVENTION
   - Avoid dangerouslySetInnerHTML
   - Escape user-generated content
   - Deploy a Content Security Policy (CSP)
   - Sanitize data before rendering

6. 🔐 SECURITY HEADERS
   - Content-Security-Policy
   - X-Frame-Options: DENY
   - X-Content-Type-Options: nosniff
   - Strict-Transport-Security (HSTS)
   - Referrer-Policy

7. 📦 DEPENDENCIES
   - Audit dependencies: npm audit / yarn audit
   - Update dependencies regularly
   - Use Snyk or Dependabot
   - Review third-party packages before installing

8. 🔍 CODE PRACTICES
   - No eval() or Function() constructor
   - Use parameterized database queries
   - Handle errors without leaking information
   - Focus code review on security

9. 🚀 DEPLOYMENT
   - Disable source maps in production
   - Minify production bundles
   - Log and monitor properly
   - Run regular security audits

10. ⚡ NEXT.JS SPECIFIC
    - Use Server Components for sensitive operations
    - Protect API Routes
    - Use middleware for authentication checks
    - Handle environment variables carefully
"""


def get_security_best_practices() -> str:
    return BEST_PRACTICES


def _report_root(target: str | Path, settings: Settings) -> Path | None:
    if settings.reports_dir:
        return Path(settings.reports_dir)
    root = resolve_project_root(target)
    # Remote callers may name paths that only exist on their machine
    return root if root.is_dir() else None


def build_analysis_response(
    results: list[FileResult],
    target: str | Path,
    errors: list[FileError] | None = None,
    settings: Settings | None = None,
) -> AnalysisResponse:
    """Render the text report and, if enabled, the HTML report for ``results``."""
    settings = settings or get_settings()
    response = AnalysisResponse(
        report=format_text_report(results),
        results=results,
        totals=summarize_scan(results),
        errors=errors or [],
    )

    if settings.html_report:
        html = generate_html_report(results, output_root=_report_root(target, settings))
        response.html_path = html.html_path
        if settings.auto_open:
            response.opened_in_browser = open_in_browser(html.html_path)

    return response


def render_response_text(response: AnalysisResponse) -> str:
    """Flatten a response into the text returned to tool callers."""
    text = response.report
    for error in response.errors:
        text += f"\n⚠️  Could not analyze {error.file_path}: {error.error}"
    if response.html_path:
        text += f"\n🌐 HTML preview generated at: {response.html_path}"
        if response.opened_in_browser:
            text += "\n✅ Report opened in browser automatically"
    return text


def analyze_file_tool(
    file_path: str,
    file_content: str | None = None,
    rules: Sequence[Rule] = DEFAULT_RULES,
    settings: Settings | None = None,
) -> AnalysisResponse:
    """Analyze one file, from supplied content or from disk."""
    logger.info(f"Analyzing file: {file_path}")
    result = analyze_file(file_path, content=file_content, rules=rules)
    return build_analysis_response([result], file_path, settings=settings)


def _normalize_files(directory_path: str, files: Sequence[SourceFile | dict[str, Any]]) -> list[tuple[str, str]]:
    pairs = []
    for entry in files:
        source = entry if isinstance(entry, SourceFile) else SourceFile.model_validate(entry)
        path = Path(source.path)
        if not path.is_absolute():
            path = Path(directory_path) / path
        pairs.append((str(path), source.content))
    return pairs


def analyze_directory_tool(
    directory_path: str,
    files: Sequence[SourceFile | dict[str, Any]] | None = None,
    rules: Sequence[Rule] = DEFAULT_RULES,
    settings: Settings | None = None,
) -> AnalysisResponse:
    """Analyze supplied file contents, or walk ``directory_path`` on disk."""
    settings = settings or get_settings()
    logger.info(f"Analyzing directory: {directory_path}")

    skipped: list[FileError] = []
    if files is not None:
        pairs = _normalize_files(directory_path, files)
    else:
        pairs, skipped = collect_source_files(directory_path, max_bytes=settings.max_file_bytes)

    scan = analyze_files(pairs, rules)
    return build_analysis_response(
        scan.files, directory_path, errors=skipped + scan.errors, settings=settings
    )
