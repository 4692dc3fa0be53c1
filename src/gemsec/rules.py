"""
SECURITY DETECTION RULES. This file contains regex patterns used to DETECT
risky constructs in JavaScript/TypeScript codebases (XSS sinks, hardcoded
secrets, weak crypto, injection). Nothing here executes the constructs it
describes.

Patterns run against whole files, so every quantifier that could cross a line
is bounded. A pattern must end outside any string literal it touches (end on
the closing quote, not the opening one) or the match is suppressed.
"""

import re
from typing import NamedTuple, Optional

from .models import Severity


class Rule(NamedTuple):
    """A named detection rule."""

    name: str
    pattern: re.Pattern
    severity: Severity
    message: str
    recommendation: str
    explanation: Optional[str] = None


_child_proc = "child_" + "process"

DEFAULT_RULES: list[Rule] = [
    # --- XSS sinks ---
    Rule(
        name="Dangerous innerHTML",
        pattern=re.compile(r"dangerouslySetInnerHTML\s*=\s*\{\{\s*__html\s*:"),
        severity=Severity.high,
        message="dangerouslySetInnerHTML bypasses React's XSS protection",
        recommendation="Sanitize the HTML with DOMPurify.sanitize() or render it as text",
        explanation=(
            "React escapes everything it renders except values passed through "
            "dangerouslySetInnerHTML. Any user-controlled part of that HTML runs as markup."
        ),
    ),
    Rule(
        name="Direct DOM HTML Assignment",
        pattern=re.compile(r"\.(?:innerHTML|outerHTML)\s*\+?=(?!=)"),
        severity=Severity.high,
        message="Assigning HTML directly to the DOM can execute injected scripts",
        recommendation="Use textContent, or sanitize with DOMPurify before assigning HTML",
    ),
    Rule(
        name="document.write Usage",
        pattern=re.compile(r"\bdocument\.write(?:ln)?\s*\("),
        severity=Severity.high,
        message="document.write() injects raw HTML into the page",
        recommendation="Build DOM nodes with createElement/textContent or render through React",
    ),
    Rule(
        name="insertAdjacentHTML Usage",
        pattern=re.compile(r"\.insertAdjacentHTML\s*\("),
        severity=Severity.medium,
        message="insertAdjacentHTML parses its argument as HTML",
        recommendation="Use insertAdjacentText or sanitize the HTML first",
    ),
    Rule(
        name="JavaScript URL",
        pattern=re.compile(r"\bhref\s*=\s*\{?\s*[\"'`]javascript:[^\"'`\n]{0,200}[\"'`]", re.IGNORECASE),
        severity=Severity.high,
        message="javascript: URLs execute code when the link is followed",
        recommendation="Use an onClick handler and only allow http(s) or relative URLs",
    ),
    Rule(
        name="Unsafe target=_blank",
        pattern=re.compile(r"\btarget\s*=\s*[\"']_blank[\"'](?![^>\n]{0,200}\brel\s*=)"),
        severity=Severity.low,
        message="Links opened with target=\"_blank\" without rel can reach window.opener",
        recommendation="Add rel=\"noopener noreferrer\" to links that open a new tab",
    ),
    # --- Code injection ---
    Rule(
        name="eval Usage",
        pattern=re.compile(r"(?<![\w.$])eval\s*\("),
        severity=Severity.critical,
        message="eval() executes arbitrary code",
        recommendation="Remove eval(); parse data with JSON.parse or use an explicit dispatch table",
    ),
    Rule(
        name="Function Constructor",
        pattern=re.compile(r"\bnew\s+Function\s*\("),
        severity=Severity.critical,
        message="The Function constructor compiles strings into code, like eval()",
        recommendation="Replace dynamic code generation with regular functions",
    ),
    Rule(
        name="String Timer Callback",
        pattern=re.compile(r"\bset(?:Timeout|Interval)\s*\(\s*(?=[\"'`])"),
        severity=Severity.high,
        message="setTimeout/setInterval with a string argument evaluates it as code",
        recommendation="Pass a function instead of a string",
    ),
    Rule(
        name="Command Injection",
        pattern=re.compile(
            r"\b(?:" + _child_proc + r"\.)?exec(?:Sync)?\s*\(\s*"
            r"(?:`[^`\n]{0,300}\$\{[^`\n]{0,300}`|[\"'][^\"'\n]{0,200}[\"']\s*\+|[\w.]{1,100}\s*\+)"
        ),
        severity=Severity.critical,
        message="Shell command built from interpolated input",
        recommendation="Use execFile/spawn with an argument array and validate every input",
    ),
    # --- Hardcoded secrets ---
    Rule(
        name="Hardcoded Secret",
        pattern=re.compile(
            r"(?:api[_-]?key|secret[_-]?key|client[_-]?secret|access[_-]?token|auth[_-]?token)"
            r"\s*[:=]\s*[\"'][a-zA-Z0-9_\-]{16,256}[\"']",
            re.IGNORECASE,
        ),
        severity=Severity.critical,
        message="Credential hardcoded in source code",
        recommendation="Load secrets from environment variables or a secret manager and rotate this one",
        explanation="Anything committed to the repository, and anything shipped in a client bundle, is public.",
    ),
    Rule(
        name="Hardcoded Password",
        pattern=re.compile(r"\b(?:password|passwd|pwd)\s*[:=]\s*[\"'][^\"'\s]{6,128}[\"']", re.IGNORECASE),
        severity=Severity.critical,
        message="Password hardcoded in source code",
        recommendation="Read the password from configuration or a secret manager",
    ),
    Rule(
        name="Private Key",
        pattern=re.compile(
            r"[:=(,]\s*[\"'`]-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----[^\"'`]{0,8000}[\"'`]"
        ),
        severity=Severity.critical,
        message="Private key material embedded in source",
        recommendation="Remove the key from the codebase and rotate it",
    ),
    Rule(
        name="Cloud Access Key",
        pattern=re.compile(
            r"[:=(,]\s*[\"'`](?:(?:AKIA|ASIA)[0-9A-Z]{16}|sk_live_[0-9a-zA-Z]{16,128}|gh[pousr]_[A-Za-z0-9]{36})[\"'`]"
        ),
        severity=Severity.critical,
        message="Cloud provider or platform token in source",
        recommendation="Revoke the token and load credentials from the environment",
    ),
    Rule(
        name="Secret in Public Env Variable",
        pattern=re.compile(r"\b(?:NEXT_PUBLIC|REACT_APP|VITE)_\w{0,50}(?:SECRET|PRIVATE|PASSWORD)\w{0,50}"),
        severity=Severity.high,
        message="Secret-looking value exposed through a client-side environment variable",
        recommendation="Keep secrets in server-only variables and access them from API routes",
    ),
    # --- Weak crypto ---
    Rule(
        name="Weak Hash Algorithm",
        pattern=re.compile(r"\bcreateHash\s*\(\s*[\"'](?:md5|sha1|md4)[\"']", re.IGNORECASE),
        severity=Severity.medium,
        message="MD5/SHA-1 are broken for security purposes",
        recommendation="Use SHA-256 or stronger; hash passwords with bcrypt, scrypt or argon2",
    ),
    Rule(
        name="Weak Cipher",
        pattern=re.compile(r"\bcreateCipheriv?\s*\(\s*[\"'](?:des|des-ede|rc4|bf|aes-\d{3}-ecb)[^\"']{0,20}[\"']", re.IGNORECASE),
        severity=Severity.high,
        message="Weak or deprecated cipher configuration",
        recommendation="Use AES-256-GCM with a random IV",
    ),
    Rule(
        name="Insecure Randomness",
        pattern=re.compile(
            r"\b(?:token|secret|password|nonce|salt|session\w{0,20}|otp)\s*[:=]\s*[^;\n]{0,80}\bMath\.random\s*\(",
            re.IGNORECASE,
        ),
        severity=Severity.medium,
        message="Math.random() is not cryptographically secure",
        recommendation="Use crypto.randomBytes or crypto.getRandomValues for security tokens",
    ),
    # --- SQL injection ---
    Rule(
        name="SQL Injection",
        pattern=re.compile(
            r"(?:\b(?:query|execute|raw)|\$(?:queryRawUnsafe|executeRawUnsafe))\s*\(\s*"
            r"(?:`(?:SELECT|INSERT|UPDATE|DELETE)\b[^`]{0,500}\$\{[^`]{0,500}`"
            r"|[\"'](?:SELECT|INSERT|UPDATE|DELETE)\b[^\"'\n]{0,300}[\"']\s*\+)",
            re.IGNORECASE,
        ),
        severity=Severity.critical,
        message="SQL query built from string concatenation or interpolation",
        recommendation="Use parameterized queries or the ORM's query builder",
    ),
    # --- Insecure storage ---
    Rule(
        name="Sensitive Data in Web Storage",
        pattern=re.compile(
            r"\b(?:localStorage|sessionStorage)\.setItem\s*\(\s*[\"'`]"
            r"[\w-]{0,40}(?:token|jwt|auth|session|password|secret)[\w-]{0,40}[\"'`]",
            re.IGNORECASE,
        ),
        severity=Severity.high,
        message="Credentials in web storage are readable by any script on the page",
        recommendation="Store session tokens in httpOnly, secure cookies",
    ),
    Rule(
        name="Insecure Cookie",
        pattern=re.compile(r"\b(?:httpOnly|secure)\s*:\s*false\b"),
        severity=Severity.medium,
        message="Cookie is missing the httpOnly or secure flag",
        recommendation="Set httpOnly: true, secure: true and sameSite on session cookies",
    ),
    Rule(
        name="Client-side Cookie Write",
        pattern=re.compile(r"\bdocument\.cookie\s*=(?!=)"),
        severity=Severity.low,
        message="Cookies written from JavaScript cannot be httpOnly",
        recommendation="Set authentication cookies from the server",
    ),
    # --- CSRF / CORS ---
    Rule(
        name="Permissive CORS",
        pattern=re.compile(
            r"\b(?:setHeader|header|set)\s*\(\s*[\"']Access-Control-Allow-Origin[\"']\s*,\s*[\"']\*[\"']"
            r"|\borigin\s*:\s*(?:[\"']\*[\"']|true\b)"
        ),
        severity=Severity.high,
        message="CORS allows any origin",
        recommendation="Restrict CORS to an explicit allowlist of trusted origins",
    ),
    Rule(
        name="Default CORS Middleware",
        pattern=re.compile(r"\bcors\s*\(\s*\)"),
        severity=Severity.medium,
        message="cors() without options reflects every origin",
        recommendation="Pass an origin allowlist to cors()",
    ),
    Rule(
        name="Missing CSRF Protection",
        pattern=re.compile(r"\bcsrf\s*:\s*false\b|\bcsrfProtection\s*=\s*false\b|\bdisableCsrf\b", re.IGNORECASE),
        severity=Severity.high,
        message="CSRF protection is explicitly disabled",
        recommendation="Enable CSRF tokens or SameSite cookies for state-changing requests",
    ),
    Rule(
        name="Wildcard postMessage",
        pattern=re.compile(r"\.postMessage\s*\([^;\n]{0,200},\s*[\"']\*[\"']"),
        severity=Severity.medium,
        message="postMessage with target origin '*' can leak data to any window",
        recommendation="Pass the exact expected origin as the targetOrigin argument",
    ),
    # --- Transport ---
    Rule(
        name="TLS Verification Disabled",
        pattern=re.compile(r"\brejectUnauthorized\s*:\s*false\b|\bNODE_TLS_REJECT_UNAUTHORIZED\b"),
        severity=Severity.high,
        message="TLS certificate verification is disabled",
        recommendation="Keep certificate validation on; trust custom CAs explicitly instead",
    ),
    Rule(
        name="Insecure HTTP Request",
        pattern=re.compile(r"\b(?:fetch|axios(?:\.\w{1,10})?)\s*\(\s*[\"'`]http://(?!localhost|127\.0\.0\.1)[^\"'`\s]{1,200}[\"'`]"),
        severity=Severity.medium,
        message="Request sent over plain HTTP",
        recommendation="Use HTTPS endpoints",
    ),
    # --- Redirects / prototype pollution / logging ---
    Rule(
        name="Open Redirect",
        pattern=re.compile(
            r"\b(?:res\.redirect|redirect|window\.location(?:\.href)?\s*=)\s*\(?\s*"
            r"(?:req\.(?:query|params|body)|searchParams\.get\s*\()"
        ),
        severity=Severity.medium,
        message="Redirect target taken from request input",
        recommendation="Validate redirect targets against an allowlist or only allow relative paths",
    ),
    Rule(
        name="Prototype Pollution",
        pattern=re.compile(r"\b(?:Object\.assign|_\.merge|merge|extend)\s*\(\s*\{\}\s*,\s*req\.(?:body|query|params)\b"),
        severity=Severity.medium,
        message="Merging request input into objects can pollute Object.prototype",
        recommendation="Validate input with a schema and copy only known keys",
    ),
    Rule(
        name="Sensitive Data Logged",
        pattern=re.compile(r"\bconsole\.(?:log|info|debug)\s*\([^;\n]{0,200}\b(?:password|token|secret|apiKey)\b", re.IGNORECASE),
        severity=Severity.low,
        message="Sensitive values written to the console",
        recommendation="Remove the log statement or redact secrets before logging",
    ),
]


def get_rules(names: list[str] | None = None) -> list[Rule]:
    """Return the default rules, optionally restricted to ``names``.

    Raises:
        ValueError: If a requested rule name does not exist.
    """
    if not names:
        return list(DEFAULT_RULES)

    by_name = {rule.name: rule for rule in DEFAULT_RULES}
    unknown = [name for name in names if name not in by_name]
    if unknown:
        raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")
    return [by_name[name] for name in names]
