"""Explicit scan session for block-level recognizers.

A ScanSession bundles the source buffer with its line table: for every line
the offset where it begins, where it ends (newline excluded), and how many
characters of leading whitespace it has. Block scanners read a session and
return a result; they never move the host's line cursor themselves.

Two constructors exist:
- ``ScanSession.from_state(state)`` views a markdown-it ``StateBlock``
  without copying its arrays.
- ``ScanSession.from_source(text)`` builds the table directly, which is how
  the scanners are exercised in isolation.

Thread Safety:
A session belongs to one parse. It is frozen, and the lists it references
are only read.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from markdown_it.rules_block import StateBlock

LineReader = Callable[[int, int, int, bool], str]


@dataclass(frozen=True, slots=True)
class ScanSession:
    """Source buffer plus per-line (begin, end, indent) table.

    Attributes:
        src: Whole document text
        begins: Offset of the first character of each line
        ends: Offset just past the last character of each line
        indents: Leading whitespace characters of each line
        blk_indent: Indentation of the enclosing block (list items, quotes)
        line_reader: Host implementation of ``get_lines``, when available

    """

    src: str
    begins: Sequence[int]
    ends: Sequence[int]
    indents: Sequence[int]
    blk_indent: int = 0
    line_reader: LineReader | None = None

    @classmethod
    def from_state(cls, state: StateBlock) -> ScanSession:
        """View a markdown-it block state as a session."""
        return cls(
            src=state.src,
            begins=state.bMarks,
            ends=state.eMarks,
            indents=state.tShift,
            blk_indent=state.blkIndent,
            line_reader=state.getLines,
        )

    @classmethod
    def from_source(cls, text: str, blk_indent: int = 0) -> ScanSession:
        """Build a session by splitting text into lines.

        Example:
            >>> session = ScanSession.from_source("$$\\n  a+b\\n$$")
            >>> session.line_count, session.indents[1]
            (3, 2)
        """
        begins: list[int] = []
        ends: list[int] = []
        indents: list[int] = []
        pos = 0
        for line in text.split("\n"):
            begins.append(pos)
            ends.append(pos + len(line))
            indents.append(len(line) - len(line.lstrip(" \t")))
            pos += len(line) + 1
        # A trailing newline does not start another line
        if text.endswith("\n"):
            begins.pop()
            ends.pop()
            indents.pop()
        return cls(src=text, begins=begins, ends=ends, indents=indents, blk_indent=blk_indent)

    @property
    def line_count(self) -> int:
        return len(self.begins)

    def content_start(self, line: int) -> int:
        """Offset of the first non-indent character of line."""
        return self.begins[line] + self.indents[line]

    def line_text(self, line: int) -> str:
        """Text of line with its indentation removed."""
        return self.src[self.content_start(line) : self.ends[line]]

    def is_empty(self, line: int) -> bool:
        """True when the line holds nothing but indentation."""
        return self.content_start(line) >= self.ends[line]

    def is_dedented(self, line: int) -> bool:
        """A non-empty line indented less than the enclosing block.

        Such a line belongs to an outer construct and ends the scan.
        """
        return not self.is_empty(line) and self.indents[line] < self.blk_indent

    def get_lines(self, begin: int, end: int, indent: int, keep_last_lf: bool = False) -> str:
        """Lines ``begin`` to ``end`` (exclusive) with up to ``indent`` columns removed."""
        if self.line_reader is not None:
            return self.line_reader(begin, end, indent, keep_last_lf)
        if begin >= end:
            return ""

        parts: list[str] = []
        for line in range(begin, end):
            first = self.begins[line]
            strip = min(indent, self.indents[line])
            # Slicing one past the end picks up the newline, if the line has one
            last = self.ends[line] + 1 if (line + 1 < end or keep_last_lf) else self.ends[line]
            parts.append(self.src[first + strip : last])
        return "".join(parts)
