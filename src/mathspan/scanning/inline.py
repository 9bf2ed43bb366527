"""Inline span scanner for ``$...$`` and ``$$...$$`` inside a paragraph.

Both variants run the same state machine at one cursor position:

1. The cursor is not on the marker: not ours (``None``).
2. The opener fails the word-boundary check: keep the marker as text.
3. No unescaped closer follows: keep the opener as text.
4. Opener and closer are adjacent: keep both as text, empty math is not math.
5. The closer fails the word-boundary check: keep the opener as text.
6. Otherwise: a span whose content is everything in between.

Every outcome except (1) consumes at least one marker, so the host always
makes progress.
"""

from __future__ import annotations

from collections.abc import Callable

from mathspan.scanning.delimiters import (
    DOUBLE_MARKER,
    MARKER,
    Delimiter,
    classify_block_delim,
    classify_inline_delim,
    find_unescaped_close,
)
from mathspan.spans import InlineScan, MathSpan, SpanKind

Classifier = Callable[[str, int], Delimiter]


def _scan_delimited(
    src: str, pos: int, marker: str, classify: Classifier, kind: SpanKind
) -> InlineScan | None:
    if not src.startswith(marker, pos):
        return None

    size = len(marker)
    if not classify(src, pos).can_open:
        return InlineScan(consumed=size, literal=marker)

    start = pos + size
    close = find_unescaped_close(src, start, marker)
    if close == -1:
        return InlineScan(consumed=size, literal=marker)

    if close == start:
        return InlineScan(consumed=2 * size, literal=marker * 2)

    if not classify(src, close).can_close:
        return InlineScan(consumed=size, literal=marker)

    span = MathSpan(
        kind=kind,
        content=src[start:close],
        markup=marker,
        is_block=kind is SpanKind.INLINE_BLOCK,
    )
    return InlineScan(consumed=close + size - pos, span=span)


def scan_inline_math(src: str, pos: int) -> InlineScan | None:
    """Scan ``$...$`` at pos.

    Examples:
        >>> scan_inline_math("$x$", 0).span.content
        'x'
        >>> scan_inline_math("a$b$c", 1)
        InlineScan(consumed=1, literal='$', span=None)
    """
    return _scan_delimited(src, pos, MARKER, classify_inline_delim, SpanKind.INLINE)


def scan_inline_display_math(src: str, pos: int) -> InlineScan | None:
    """Scan ``$$...$$`` at pos, inside running text.

    Examples:
        >>> scan_inline_display_math("$$a$$", 0).consumed
        5
        >>> scan_inline_display_math("$$$$", 0)
        InlineScan(consumed=2, literal='$$', span=None)
    """
    return _scan_delimited(src, pos, DOUBLE_MARKER, classify_block_delim, SpanKind.INLINE_BLOCK)
