"""Block span scanner for ``$$`` fenced math.

Recognizes, at the first line of a block::

    $$ a + b $$          single line

    $$                   multi-line; the closing line may carry content
    a + b
    \\quad c $$

The scan stops at the first closing ``$$``, at a line that dedents out of
the enclosing block, or at document end. An unterminated block runs to the
end of the document rather than failing, so a truncated document still
shows its last formula.
"""

from __future__ import annotations

from mathspan.scanning.delimiters import DOUBLE_MARKER
from mathspan.scanning.session import ScanSession
from mathspan.spans import BlockScan, MathSpan, SpanKind
from mathspan.utils.text import is_blank


def probe_math_block(session: ScanSession, start: int) -> bool:
    """True when line ``start`` opens a ``$$`` block."""
    pos = session.content_start(start)
    return session.src.startswith(DOUBLE_MARKER, pos, session.ends[start])


def _closing_prefix(text: str) -> str | None:
    """Content before the closing marker on a line, or None if it has none.

    A line ending in ``$$`` closes at its last marker. Failing that, a marker
    anywhere in the line still closes the block, keeping only what precedes
    the first one.
    """
    stripped = text.strip()
    if stripped.endswith(DOUBLE_MARKER):
        return text[: text.rfind(DOUBLE_MARKER)]
    if DOUBLE_MARKER in stripped:
        return text[: text.find(DOUBLE_MARKER)]
    return None


def scan_math_block(session: ScanSession, start: int, end: int) -> BlockScan | None:
    """Scan a ``$$`` block whose opener is on line ``start``.

    Args:
        session: Source buffer and line table
        start: Line holding the opening ``$$``
        end: First line past the region the host lets us consume

    Returns:
        BlockScan with the span and the next line to parse, or None when the
        line does not open a math block.

    Example:
        >>> session = ScanSession.from_source("$$\\na+b\\n$$")
        >>> result = scan_math_block(session, 0, session.line_count)
        >>> result.span.content, result.next_line
        ('a+b', 3)
    """
    if not probe_math_block(session, start):
        return None

    first_line = session.src[session.content_start(start) + 2 : session.ends[start]]
    last_line = ""
    found = False

    trimmed = first_line.strip()
    if trimmed.endswith(DOUBLE_MARKER):
        first_line = trimmed[:-2]
        found = True

    line = start
    next_line = start + 1
    while not found:
        line += 1
        if line >= end:
            next_line = end
            break
        if session.is_dedented(line):
            # Leave the dedented line to the enclosing construct
            next_line = line
            break
        prefix = _closing_prefix(session.line_text(line))
        if prefix is not None:
            last_line = prefix
            next_line = line + 1
            found = True

    parts: list[str] = []
    if not is_blank(first_line):
        parts.append(first_line)
    interior_end = line if line < end else end
    if interior_end > start + 1:
        parts.append(session.get_lines(start + 1, interior_end, session.indents[start], False))
    if not is_blank(last_line):
        parts.append(last_line)

    span = MathSpan(
        kind=SpanKind.BLOCK,
        content="\n".join(parts),
        markup=DOUBLE_MARKER,
        is_block=True,
        line_range=(start, next_line),
    )
    return BlockScan(next_line=next_line, span=span)
