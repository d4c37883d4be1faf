"""Description escaping shared by every shell dialect."""

from __future__ import annotations

import re

__all__ = ["sanitize_description"]

# backticks and double-quotes need three backslashes once the script is sourced
_QUOTE_RE = re.compile(r"([`\"])")
# square brackets need two
_BRACKET_RE = re.compile(r"([\[\]])")
_BACKSLASH_RE = re.compile(r"\\")


def sanitize_description(description: str | None) -> str:
    """Make a description safe to embed in a completion script.

    Backslashes are doubled first, so that none of them can swallow a
    closing quote. Then backticks and double-quotes get three backslashes,
    square brackets two, and only the first line is kept. `None` gives an
    empty string.
    """
    if description is None:
        return ""
    escaped = _BACKSLASH_RE.sub(r"\\\\", description)
    escaped = _QUOTE_RE.sub(r"\\\\\\\1", escaped)
    escaped = _BRACKET_RE.sub(r"\\\\\1", escaped)
    return escaped.split("\n")[0]
