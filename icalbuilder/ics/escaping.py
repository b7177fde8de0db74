"""Text escaping and line folding for iCalendar content lines."""

import re
from collections.abc import Iterable

# RFC 5545 section 3.1: lines SHOULD NOT be longer than 75 octets
MAX_LINE_OCTETS = 75

LINE_BREAK = "\r\n"

_SPECIAL_CHARS = re.compile(r"([\\;,])")
_NEWLINES = re.compile(r"\r\n|\r|\n")


def escape(value: object) -> str:
    """Escape a TEXT value.

    Backslash, semicolon and comma are prefixed with a backslash and every
    newline sequence becomes the two characters ``\\n``. Everything else is
    left untouched.
    """
    text = _SPECIAL_CHARS.sub(r"\\\1", str(value))
    return _NEWLINES.sub(r"\\n", text)


def quote_param(value: object) -> str:
    """Render a parameter value as a quoted string.

    DQUOTE is not allowed inside a quoted parameter value, so it is dropped.
    """
    return '"' + str(value).replace('"', "") + '"'


def fold_line(line: str, limit: int = MAX_LINE_OCTETS) -> str:
    """Fold a single content line so no physical line exceeds ``limit`` octets.

    Continuation lines start with a single space, which counts towards the
    limit. Characters are never split across a fold.
    """
    if len(line.encode("utf-8")) <= limit:
        return line

    parts = []
    current: list[str] = []
    size = 0
    budget = limit

    for char in line:
        char_size = len(char.encode("utf-8"))
        if current and size + char_size > budget:
            parts.append("".join(current))
            current = []
            size = 0
            budget = limit - 1
        current.append(char)
        size += char_size

    parts.append("".join(current))
    return (LINE_BREAK + " ").join(parts)


def fold_lines(lines: Iterable[str], limit: int = MAX_LINE_OCTETS) -> str:
    """Fold and join content lines into CRLF-terminated text."""
    return "".join(fold_line(line, limit) + LINE_BREAK for line in lines)
