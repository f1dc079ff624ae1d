"""ANSI-aware text measurement.

Provides functions for stripping embedded escape sequences, measuring the
visible terminal width of a string, and cutting strings by visible columns
while keeping every escape sequence intact.

Widths are measured per code unit: escape sequences count as zero, control
characters as zero, and everything else as whatever ``wcwidth`` reports.
"""

from __future__ import annotations

import re

import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# CSI sequences: ESC[ [?] <params> <final letter>
ANSI_CODE_PATTERN = r"\x1b\[\??[0-9;]*[A-Za-z]"

_ANSI_RE = re.compile(ANSI_CODE_PATTERN)
_SPLIT_RE = re.compile(f"({ANSI_CODE_PATTERN})")


# ---------------------------------------------------------------------------
# Stripping / detection
# ---------------------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Return *text* with every escape sequence removed."""
    return _ANSI_RE.sub("", text)


def starts_with_ansi_code(text: str) -> bool:
    """Return ``True`` if *text* begins with an escape sequence."""
    return _ANSI_RE.match(text) is not None


def split_ansi(text: str) -> list[str]:
    """Split *text* into alternating plain runs and escape sequences.

    Empty runs are dropped, so ``"".join(split_ansi(s)) == s`` and every
    element is either a single escape sequence or contains none.
    """
    return [part for part in _SPLIT_RE.split(text) if part]


# ---------------------------------------------------------------------------
# Width
# ---------------------------------------------------------------------------

def char_width(ch: str) -> int:
    """Return the number of terminal columns a single character occupies."""
    cp = ord(ch)
    if 0x20 <= cp < 0x7F:
        return 1
    # Control characters
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    return max(_wcwidth.wcwidth(ch), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    Escape sequences are stripped first. Printable ASCII takes a fast path.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    return sum(char_width(ch) for ch in stripped)


def take_columns(text: str, max_cols: int) -> str:
    """Return a prefix of *text* that fits within *max_cols* visible columns.

    Escape sequences are preserved even past the cut, so trailing color
    resets still reach the terminal.
    """
    result: list[str] = []
    cols = 0
    full = False

    for part in split_ansi(text):
        if starts_with_ansi_code(part):
            result.append(part)
            continue
        if full:
            continue
        for ch in part:
            w = char_width(ch)
            if cols + w > max_cols:
                full = True
                break
            result.append(ch)
            cols += w

    return "".join(result)
