"""ANSI terminal color utilities.

Honors the NO_COLOR and FORCE_COLOR environment variables and
disables colors when the stream is not a TTY.
"""

import os
import sys
from typing import TextIO

__all__ = [
    "BOLD",
    "DIM",
    "GREEN",
    "RED",
    "RESET",
    "YELLOW",
    "LogStyles",
    "MessageStyles",
    "colorize",
    "make_style",
    "should_colorize",
    "style_for",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

BOLD = "1"
DIM = "2"

RED = "31"
GREEN = "32"
YELLOW = "33"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI colors should be written to `stream`.

    Args:
        stream: The output stream to check. Defaults to sys.stderr.

    Returns:
        True if colors should be used, False otherwise.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, *codes: str) -> str:
    """Wrap text in ANSI color codes."""
    if not codes:
        return text
    return f"{_ESC}{';'.join(codes)}m{text}{RESET}"


def make_style(*codes: str) -> tuple[str, str]:
    """Create a (prefix, suffix) pair usable in log formats."""
    if not codes:
        return ("", RESET)
    return (f"{_ESC}{';'.join(codes)}m", RESET)


def style_for(text: str, codes: tuple[str, ...], stream: TextIO | None = None) -> str:
    """Colorize `text` only when `stream` accepts colors."""
    if should_colorize(stream):
        return colorize(text, *codes)
    return text


class LogStyles:
    """Pre-built styles for log levels."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)


class MessageStyles:
    """Pre-built styles for CLI messages."""

    PATH = (GREEN, BOLD)
    COMMAND = (YELLOW, BOLD)
