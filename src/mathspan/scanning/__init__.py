"""Recognition engine for math spans.

Every scanner here is a pure function of the source text (or a ScanSession)
and a position. None of them touch markdown-it state; the glue in
:mod:`mathspan.plugin` applies their results.

Modules:
- delimiters: word-boundary classification and escape-aware closer search
- session: source buffer plus line table for block scanners
- inline: ``$...$`` and ``$$...$$`` inside running text
- block: ``$$`` fenced multi-line blocks
- environments: bare ``\\begin``/``\\end`` environments
- embedded: math inside raw HTML blocks

"""

from mathspan.scanning.block import probe_math_block, scan_math_block
from mathspan.scanning.delimiters import (
    Delimiter,
    classify_block_delim,
    classify_inline_delim,
    find_unescaped_close,
)
from mathspan.scanning.embedded import (
    BLOCK_IN_HTML,
    INLINE_IN_HTML,
    EmbeddedVariant,
    Fragment,
    expand_html_blocks,
    split_embedded_math,
)
from mathspan.scanning.environments import (
    EnvironmentStack,
    probe_bare_block,
    scan_bare_block,
    scan_inline_bare_block,
)
from mathspan.scanning.inline import scan_inline_display_math, scan_inline_math
from mathspan.scanning.session import ScanSession

__all__ = [
    "BLOCK_IN_HTML",
    "INLINE_IN_HTML",
    "Delimiter",
    "EmbeddedVariant",
    "EnvironmentStack",
    "Fragment",
    "ScanSession",
    "classify_block_delim",
    "classify_inline_delim",
    "expand_html_blocks",
    "find_unescaped_close",
    "probe_bare_block",
    "probe_math_block",
    "scan_bare_block",
    "scan_inline_bare_block",
    "scan_inline_display_math",
    "scan_inline_math",
    "split_embedded_math",
]
