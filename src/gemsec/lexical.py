"""Lexical context detection for JavaScript/TypeScript source.

Pattern rules are plain regular expressions with no syntax awareness. Before a
match is reported the engine asks whether it sits inside a string literal, a
template literal, a comment or a regex literal, so files that merely mention a
dangerous construct (rule definitions, docs in comments) do not trigger.

This is a single-pass approximation, not a tokenizer:
- a regex literal containing a quote character (``/'/``) desynchronizes the
  string state for the rest of the file
- an apostrophe in JSX text (``<p>Don't</p>``) opens a single-quoted string
  that runs to the next ``'``, hiding any match in between
- ``${...}`` inside a template literal counts as template body
- division next to regex-looking text can be misread as a regex literal
"""

from typing import Iterator, Optional

# Regex-literal search windows
REGEX_LOOKAHEAD = 20
REGEX_LOOKBEHIND = 200

_REGEX_FLAGS = frozenset("gimsuvy")
_TERMINATOR_FOLLOWERS = frozenset(";,)]}.")
_EXPRESSION_START = frozenset("=:([{,;")


def _iter_inside_flags(text: str) -> Iterator[bool]:
    """Yield, for every offset, whether it is inside a string or comment.

    The flag for an offset reflects the state after that character has been
    consumed, so an opening quote is inside and a closing quote is outside.
    Characters swallowed by a two-character step (escaped characters, the
    second character of ``//``, ``/*`` and ``*/``) share the flag of the step.
    """
    in_single = in_double = in_template = False
    in_line_comment = in_block_comment = False
    length = len(text)
    i = 0

    while i < length:
        char = text[i]
        following = text[i + 1] if i + 1 < length else ""
        step = 1

        if in_line_comment:
            if char == "\n":
                in_line_comment = False
        elif in_block_comment:
            if char == "*" and following == "/":
                in_block_comment = False
                step = 2
        elif char == "\\":
            step = 2
        elif char == "/" and following in ("/", "*") and not (in_single or in_double or in_template):
            if following == "/":
                in_line_comment = True
            else:
                in_block_comment = True
            step = 2
        elif char == "'" and not (in_double or in_template):
            in_single = not in_single
        elif char == '"' and not (in_single or in_template):
            in_double = not in_double
        elif char == "`" and not (in_single or in_double):
            in_template = not in_template

        inside = in_single or in_double or in_template or in_line_comment or in_block_comment
        for _ in range(min(step, length - i)):
            yield inside
        i += step


def is_inside_string_or_comment(text: str, position: int) -> bool:
    """Check whether ``position`` falls inside a quoted string, template
    literal, line comment or block comment.

    Scans forward from the start of ``text``; positions past the end report
    the state at end of input.
    """
    if position < 0 or not text:
        return False

    inside = False
    for index, inside in enumerate(_iter_inside_flags(text)):
        if index >= position:
            break
    return inside


def _is_escaped(text: str, index: int) -> bool:
    backslashes = 0
    j = index - 1
    while j >= 0 and text[j] == "\\":
        backslashes += 1
        j -= 1
    return backslashes % 2 == 1


def _find_closing_slash(text: str, position: int) -> Optional[int]:
    """Find a ``/`` at or after ``position`` that looks like a regex terminator."""
    length = len(text)
    for j in range(position, min(length, position + REGEX_LOOKAHEAD + 1)):
        char = text[j]
        if char == "\n":
            return None
        if char != "/" or _is_escaped(text, j):
            continue
        following = text[j + 1] if j + 1 < length else ""
        # Either slash of a comment opener
        if following in ("/", "*") or (j > 0 and text[j - 1] == "/" and not _is_escaped(text, j - 1)):
            continue
        if (
            following == ""
            or following.isspace()
            or following in _TERMINATOR_FOLLOWERS
            or following in _REGEX_FLAGS
        ):
            return j
    return None


def _find_opening_slash(text: str, closing: int) -> Optional[int]:
    """Search backward from ``closing`` for a ``/`` in expression-start context."""
    for k in range(closing - 1, max(-1, closing - REGEX_LOOKBEHIND - 1), -1):
        char = text[k]
        if char == "\n":
            return None
        if char != "/" or _is_escaped(text, k):
            continue

        previous = text[k - 1] if k > 0 else ""
        following = text[k + 1]
        # Comment openers, and division written with surrounding spaces
        if previous == "/" or following in ("/", "*") or following.isspace():
            continue
        if previous == "" or previous.isspace() or previous in _EXPRESSION_START:
            return k
    return None


def is_inside_regex_literal(text: str, position: int) -> bool:
    """Heuristically check whether ``position`` lies inside a regex literal.

    Looks a short distance ahead for a slash that could close a regex literal
    and then back from it for a slash that could open one. The position is
    inside when it sits strictly after the opener and at or before the closer.
    """
    if position < 0 or position >= len(text):
        return False

    closing = _find_closing_slash(text, position)
    if closing is None:
        return False

    opening = _find_opening_slash(text, closing)
    return opening is not None and opening < position <= closing


class LexicalClassifier:
    """Lexical context queries over one source text.

    The string/comment state of every offset is computed once, on first use,
    so the engine can query many match endpoints in constant time.
    """

    def __init__(self, text: str):
        self.text = text
        self._inside: bytearray | None = None

    def _flags(self) -> bytearray:
        if self._inside is None:
            self._inside = bytearray(_iter_inside_flags(self.text))
        return self._inside

    def is_inside_string_or_comment(self, position: int) -> bool:
        if position < 0 or not self.text:
            return False
        flags = self._flags()
        return bool(flags[min(position, len(flags) - 1)])

    def is_inside_regex_literal(self, position: int) -> bool:
        return is_inside_regex_literal(self.text, position)

    def is_suppressed(self, start: int, end: int) -> bool:
        """Check whether a match spanning ``[start, end)`` is non-executable text."""
        last = max(start, end - 1)
        return (
            self.is_inside_string_or_comment(start)
            or self.is_inside_string_or_comment(last)
            or self.is_inside_regex_literal(start)
        )
