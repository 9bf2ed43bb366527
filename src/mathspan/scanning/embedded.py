"""Extract math embedded in raw HTML blocks.

CommonMark passes HTML blocks through untouched, so ``$$x$$`` written inside
``<div>...</div>`` never reaches the inline scanners. This post-pass runs
once over the finished token stream and splits every ``html_block`` token
that contains math into alternating HTML and math tokens::

    html_block("<div>$$x$$</div>")
      -> html_block("<div>"), math_block("x"), html_block("</div>")

The pass rebuilds the token list instead of splicing it in place. ``$$``
spans are extracted before ``$`` spans so a display formula is never read as
two adjacent inline ones.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from mathspan.scanning.delimiters import DOUBLE_MARKER, MARKER
from mathspan.spans import MathSpan, SpanKind

if TYPE_CHECKING:
    from markdown_it.token import Token

HTML_BLOCK = "html_block"


@dataclass(frozen=True, slots=True)
class EmbeddedVariant:
    """One extraction pass: which delimiters it looks for and what it emits.

    The pattern captures, per match, the HTML before the math, the math, and
    the HTML after it up to (not including) the next math span.

    """

    name: str
    pattern: re.Pattern[str]
    kind: SpanKind
    markup: str


BLOCK_IN_HTML = EmbeddedVariant(
    name="math_block_in_html_block",
    pattern=re.compile(
        r"(?P<before>[\s\S]*?)\$\$(?P<math>[\s\S]+?)\$\$"
        r"(?P<after>(?:(?!\$\$[\s\S]+?\$\$)[\s\S])*)"
    ),
    kind=SpanKind.BLOCK,
    markup=DOUBLE_MARKER,
)

INLINE_IN_HTML = EmbeddedVariant(
    name="math_inline_in_html_block",
    pattern=re.compile(
        r"(?P<before>[\s\S]*?)\$(?P<math>.*?)\$"
        r"(?P<after>(?:(?!\$.*?\$)[\s\S])*)"
    ),
    kind=SpanKind.INLINE,
    markup=MARKER,
)


class Fragment(NamedTuple):
    """A piece of a split HTML block: raw HTML when span is None, else math."""

    content: str
    span: MathSpan | None = None

    @property
    def is_math(self) -> bool:
        return self.span is not None


def split_embedded_math(content: str, variant: EmbeddedVariant) -> list[Fragment]:
    """Split HTML content into HTML and math fragments, in document order.

    Returns an empty list when the content holds no math for this variant.

    Example:
        >>> [f.content for f in split_embedded_math("<b>$$x$$</b>", BLOCK_IN_HTML)]
        ['<b>', 'x', '</b>']
    """
    fragments: list[Fragment] = []
    for match in variant.pattern.finditer(content):
        before = match.group("before")
        math = match.group("math")
        after = match.group("after")

        if before:
            fragments.append(Fragment(before))
        if math:
            span = MathSpan(
                kind=variant.kind,
                content=math,
                markup=variant.markup,
                is_block=True,
            )
            fragments.append(Fragment(math, span))
        if after:
            fragments.append(Fragment(after))
    return fragments


def _fragment_token(original: Token, fragment: Fragment) -> Token:
    if fragment.span is None:
        return original.copy(type=HTML_BLOCK, map=None, content=fragment.content)
    return original.copy(
        type=fragment.span.kind.token_type,
        tag="math",
        map=None,
        content=fragment.span.content,
        markup=fragment.span.markup,
        block=True,
    )


def expand_html_blocks(tokens: Iterable[Token], variant: EmbeddedVariant) -> list[Token]:
    """Return a new token list with math split out of every HTML block.

    Tokens other than ``html_block``, and HTML blocks without math, are
    passed through as the same objects. Synthesized tokens copy the original
    token's metadata but drop its source map, since their exact lines are
    no longer known.
    """
    expanded: list[Token] = []
    for token in tokens:
        if token.type != HTML_BLOCK:
            expanded.append(token)
            continue

        fragments = split_embedded_math(token.content, variant)
        if not fragments:
            expanded.append(token)
            continue

        expanded.extend(_fragment_token(token, fragment) for fragment in fragments)
    return expanded
