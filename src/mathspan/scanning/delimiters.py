"""Delimiter classification and escape-aware closer search.

Word-boundary rules follow markdown-it-katex exactly: a single ``$`` opens
only after a non-word character and closes only before one, and a ``$``
preceded by a backslash never opens. "Word" is ASCII ``[A-Za-z0-9_]``, the
JavaScript meaning of ``\\w``, so ``é$x$`` behaves as it does there.

All functions are pure; a position outside the buffer reads as "absent".
"""

from __future__ import annotations

import re
from typing import NamedTuple

MARKER = "$"
DOUBLE_MARKER = "$$"
BACKSLASH = "\\"

_WORD_CHAR = re.compile(r"\w", re.ASCII)


class Delimiter(NamedTuple):
    """Whether a delimiter at a position may open and/or close a span."""

    can_open: bool
    can_close: bool


NOT_A_DELIMITER = Delimiter(can_open=False, can_close=False)


def _char_at(src: str, pos: int) -> str | None:
    """Character at pos, or None outside the buffer (never wraps around)."""
    if 0 <= pos < len(src):
        return src[pos]
    return None


def _is_boundary(char: str | None) -> bool:
    """Absent, whitespace, or anything that is not a word character."""
    return char is None or char.isspace() or _WORD_CHAR.match(char) is None


def classify_inline_delim(src: str, pos: int) -> Delimiter:
    """Classify a single ``$`` at pos.

    Examples:
        >>> classify_inline_delim("$x$", 0)
        Delimiter(can_open=True, can_close=False)
        >>> classify_inline_delim("a$b", 1)
        Delimiter(can_open=False, can_close=False)
    """
    if _char_at(src, pos) != MARKER:
        return NOT_A_DELIMITER

    prev_char = _char_at(src, pos - 1)
    next_char = _char_at(src, pos + 1)

    can_open = prev_char != MARKER and prev_char != BACKSLASH and _is_boundary(prev_char)
    can_close = next_char != MARKER and _is_boundary(next_char)
    return Delimiter(can_open=can_open, can_close=can_close)


def classify_block_delim(src: str, pos: int) -> Delimiter:
    """Classify a ``$$`` pair starting at pos.

    Runs of three or more markers are rejected, as is a pair preceded by a
    backslash. A valid pair can both open and close.
    """
    if (
        _char_at(src, pos) == MARKER
        and _char_at(src, pos + 1) == MARKER
        and _char_at(src, pos - 1) not in (MARKER, BACKSLASH)
        and _char_at(src, pos + 2) != MARKER
    ):
        return Delimiter(can_open=True, can_close=True)
    return NOT_A_DELIMITER


def count_preceding_backslashes(src: str, pos: int) -> int:
    """Number of consecutive backslashes immediately before pos."""
    count = 0
    pos -= 1
    while pos >= 0 and src[pos] == BACKSLASH:
        count += 1
        pos -= 1
    return count


def find_unescaped_close(src: str, start: int, marker: str = MARKER) -> int:
    """Find the next occurrence of marker that is not backslash-escaped.

    An even number of backslashes before a candidate (zero included) leaves
    it unescaped. Escaped candidates are skipped by ``len(marker)`` so the
    search always moves forward.

    Args:
        src: Source text
        start: Offset to start searching from
        marker: Closing marker, "$" or "$$"

    Returns:
        Offset of the closing marker, or -1 when there is none.

    Examples:
        >>> find_unescaped_close("a\\\\$b$", 0)
        4
    """
    match = src.find(marker, start)
    while match != -1:
        if count_preceding_backslashes(src, match) % 2 == 0:
            return match
        match = src.find(marker, match + len(marker))
    return -1
