"""Bare LaTeX environments: ``\\begin{name}`` ... ``\\end{name}`` without ``$$``.

Two recognizers share one nesting rule:

- ``scan_bare_block`` works on block lines. The opening line must start
  with ``\\begin{..}`` and follow a blank line (or start the document). If
  no balancing ``\\end`` turns up, the block runs to document end.
- ``scan_inline_bare_block`` fires when a paragraph's inline cursor sits on
  a newline directly followed by ``\\begin``. Without a balancing ``\\end``
  it reports no match and the text stays ordinary paragraph text.

Nesting is tracked by depth only: every ``\\end`` pops one level whatever
its name, so ``\\begin{a}\\begin{b}\\end{a}\\end{b}`` is balanced. Changing
that would change which text ends up inside malformed environments.
"""

from __future__ import annotations

import re

from mathspan.scanning.delimiters import DOUBLE_MARKER
from mathspan.scanning.session import ScanSession
from mathspan.spans import BlockScan, InlineScan, MathSpan, SpanKind
from mathspan.utils.text import is_blank

_BEGIN_LINE = re.compile(r"^\s*\\begin\s*\{([^{}]+)\}")
_ENV_MARKER = re.compile(r"(\\begin|\\end)\s*\{([^{}]+)\}")

INLINE_TRIGGER = "\n\\begin"


class EnvironmentStack:
    """Open environment names, innermost last.

    Names are recorded for inspection but never compared.

    Example:
        >>> stack = EnvironmentStack()
        >>> stack.feed("\\\\begin{A}\\\\begin{B}")
        False
        >>> stack.depth
        2
        >>> stack.feed("\\\\end{A}")
        False
        >>> stack.feed("\\\\end{B}")
        True
    """

    __slots__ = ("_names",)

    def __init__(self) -> None:
        self._names: list[str] = []

    @property
    def depth(self) -> int:
        return len(self._names)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def feed(self, line: str) -> bool:
        """Apply every marker on line; True once a pop leaves the stack empty.

        Markers after the balancing ``\\end`` on the same line are ignored.
        """
        for match in _ENV_MARKER.finditer(line):
            if match.group(1) == "\\begin":
                self._names.append(match.group(2).strip())
                continue
            if self._names:
                self._names.pop()
            if not self._names:
                return True
        return False


def probe_bare_block(session: ScanSession, start: int) -> bool:
    """True when line ``start`` opens a bare environment block."""
    if session.is_dedented(start):
        return False
    if _BEGIN_LINE.match(session.line_text(start)) is None:
        return False
    # Mid-paragraph environments are left to the inline recognizer
    return start == 0 or is_blank(session.line_text(start - 1))


def scan_bare_block(session: ScanSession, start: int, end: int) -> BlockScan | None:
    """Scan a bare environment block opening on line ``start``.

    The span covers the opening line through the line holding the balancing
    ``\\end``, inclusive, trimmed of surrounding whitespace.

    Args:
        session: Source buffer and line table
        start: Line holding the opening ``\\begin``
        end: First line past the region the host lets us consume

    Returns:
        BlockScan, or None when the line does not open a bare block.
    """
    if not probe_bare_block(session, start):
        return None

    stack = EnvironmentStack()
    line = start
    last_line = ""
    found = False
    while line < end:
        if session.is_dedented(line):
            break
        text = session.line_text(line)
        if stack.feed(text):
            last_line = text
            found = True
            break
        line += 1

    next_line = line + 1 if found else line
    body = session.get_lines(start, line, session.indents[start], True)
    span = MathSpan(
        kind=SpanKind.BARE_BLOCK,
        content=(body + last_line).strip(),
        markup=DOUBLE_MARKER,
        is_block=True,
        line_range=(start, next_line),
    )
    return BlockScan(next_line=next_line, span=span)


def scan_inline_bare_block(src: str, pos: int) -> InlineScan | None:
    """Scan a bare environment reached from inline text.

    ``src[pos]`` must be the newline that precedes the ``\\begin`` line. On
    success the newline, the environment lines and the newline ending the
    ``\\end`` line (when there is one) are consumed.

    Example:
        >>> result = scan_inline_bare_block("x\\n\\\\begin{a}\\ny\\n\\\\end{a}\\nz", 1)
        >>> result.span.content
        '\\\\begin{a}\\ny\\n\\\\end{a}'
        >>> result.consumed
        21
    """
    if not src.startswith(INLINE_TRIGGER, pos):
        return None

    tail = src[pos:]
    lines = tail.split("\n")[1:]
    stack = EnvironmentStack()
    for found, line in enumerate(lines):
        if stack.feed(line):
            break
    else:
        return None

    # Leading newline, the consumed lines and the newlines between them
    end_index = 1 + sum(len(text) for text in lines[: found + 1]) + found
    span = MathSpan(
        kind=SpanKind.INLINE_BARE_BLOCK,
        content=tail[1:end_index],
        markup=DOUBLE_MARKER,
        is_block=True,
    )
    return InlineScan(consumed=min(end_index + 1, len(tail)), span=span)
