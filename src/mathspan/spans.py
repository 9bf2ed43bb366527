"""Typed results produced by the recognition engine.

Scanners never touch host state. Each one inspects the source and returns a
frozen value describing what it recognized and how far the cursor should
move; the markdown-it glue in :mod:`mathspan.plugin` applies that value.

Result Hierarchy:
MathSpan      one recognized region of math notation
InlineScan    outcome of an inline scanner at one cursor position
BlockScan     outcome of a block scanner at one start line

Thread Safety:
All results are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum


class SpanKind(Enum):
    """What produced a span, and therefore which host token it becomes."""

    INLINE = "inline"  # $...$
    INLINE_BLOCK = "inline_block"  # $$...$$ inside a paragraph
    BLOCK = "block"  # $$ fenced lines
    BARE_BLOCK = "bare_block"  # \begin{..} ... \end{..} after a blank line
    INLINE_BARE_BLOCK = "inline_bare_block"  # same, reached mid-paragraph

    @property
    def token_type(self) -> str:
        """Host token type for this kind of span."""
        return _TOKEN_TYPES[self]


# Block-level bare environments render exactly like $$ blocks
_TOKEN_TYPES: dict[SpanKind, str] = {
    SpanKind.INLINE: "math_inline",
    SpanKind.INLINE_BLOCK: "math_inline_block",
    SpanKind.BLOCK: "math_block",
    SpanKind.BARE_BLOCK: "math_block",
    SpanKind.INLINE_BARE_BLOCK: "math_inline_bare_block",
}


@dataclass(frozen=True, slots=True)
class MathSpan:
    """A recognized math span.

    Markdown: $E = mc^2$
    content: "E = mc^2", markup: "$"

    Attributes:
        kind: Which recognizer produced the span
        content: Raw notation between the delimiters (delimiters excluded)
        markup: Delimiter that produced it, "$" or "$$"
        is_block: Whether the span renders as a block
        line_range: Half-open (start, end) source lines, block spans only

    """

    kind: SpanKind
    content: str
    markup: str
    is_block: bool = False
    line_range: tuple[int, int] | None = None


@dataclass(frozen=True, slots=True)
class InlineScan:
    """Outcome of an inline scanner that claimed the cursor position.

    ``consumed`` is always positive, so the host makes progress even when
    recognition failed. On failure ``literal`` carries the delimiter text the
    host should keep as ordinary text and ``span`` is None.

    """

    consumed: int
    literal: str = ""
    span: MathSpan | None = None

    @property
    def matched(self) -> bool:
        return self.span is not None


@dataclass(frozen=True, slots=True)
class BlockScan:
    """Outcome of a block scanner that recognized a span.

    ``next_line`` is the first line the host should look at afterwards.

    """

    next_line: int
    span: MathSpan
