"""markdown-it plugin wiring the recognition engine into the parser.

Usage:
    >>> from markdown_it import MarkdownIt
    >>> from mathspan import math_plugin
    >>> md = MarkdownIt("commonmark").use(math_plugin, enable_bare_blocks=True)
    >>> md.render("Euler: $e^{i\\\\pi} + 1 = 0$")  # doctest: +ELLIPSIS
    '<p>Euler: <math ...</math></p>\\n'

Extension points, in the order markdown-it runs them:

1. Inline rules, tried at every inline cursor position:
   - ``math_inline_bare_block`` before ``text`` (bare blocks only)
   - ``math_inline_block`` then ``math_inline`` right after ``escape``,
     so an escaped ``\\$`` never reaches them
2. Block rule ``math_block`` after ``blockquote``, allowed to interrupt
   paragraphs, reference definitions, blockquotes and lists. Bare
   environments are tried before ``$$``.
3. Core rules, once per document, splitting math out of HTML blocks.
4. Render rules for each math token type, plus the ``math`` fence hook.

Thread Safety:
Rules close over the frozen MathConfig and the MathRenderer only. All parse
state lives in markdown-it's state objects, so one configured MarkdownIt can
serve concurrent renders.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from mathspan.config import DEFAULT_CONFIG, MathConfig
from mathspan.errors import PluginError
from mathspan.renderers.mathml import MathRenderer, Typesetter
from mathspan.scanning.block import probe_math_block, scan_math_block
from mathspan.scanning.embedded import (
    BLOCK_IN_HTML,
    INLINE_IN_HTML,
    EmbeddedVariant,
    expand_html_blocks,
)
from mathspan.scanning.environments import (
    probe_bare_block,
    scan_bare_block,
    scan_inline_bare_block,
)
from mathspan.scanning.inline import scan_inline_display_math, scan_inline_math
from mathspan.scanning.session import ScanSession
from mathspan.spans import BlockScan, InlineScan, SpanKind
from mathspan.utils.logger import get_logger

if TYPE_CHECKING:
    from markdown_it import MarkdownIt
    from markdown_it.rules_block import StateBlock
    from markdown_it.rules_core import StateCore
    from markdown_it.rules_inline import StateInline
    from markdown_it.token import Token
    from markdown_it.utils import EnvType, OptionsDict

logger = get_logger(__name__)

PLUGIN_NAME = "math"
MATH_FENCE_LANGUAGE = "math"

# Constructs a block-level $$ or \begin line may interrupt
BLOCK_ALT = ["paragraph", "reference", "blockquote", "list"]

# An html_inline token that opens an element, e.g. <span class="x">
_OPEN_HTML_TAG = re.compile(r"^<\w+.+[^/]>$")

BlockProbe = Callable[[ScanSession, int], bool]
BlockScanner = Callable[[ScanSession, int, int], BlockScan | None]


def _resolve_config(
    config: MathConfig | Mapping[str, Any] | None, options: Mapping[str, Any]
) -> MathConfig:
    match config:
        case None:
            base = DEFAULT_CONFIG
        case MathConfig():
            base = config
        case Mapping():
            base = MathConfig.from_dict(config)
        case _:
            raise PluginError(
                PLUGIN_NAME,
                f"config must be a MathConfig or a mapping, got {type(config).__name__}",
            )
    return MathConfig.from_dict(options, base=base) if options else base


def _apply_inline(state: StateInline, result: InlineScan, silent: bool) -> bool:
    """Commit an inline scan result to the host state."""
    if not silent:
        if result.span is None:
            state.pending += result.literal
        else:
            token = state.push(result.span.kind.token_type, "math", 0)
            token.markup = result.span.markup
            token.content = result.span.content
            if result.span.is_block:
                token.block = True
    state.pos += result.consumed
    return True


def _inside_inline_html(state: StateInline) -> bool:
    """True when the previous token opened an inline HTML element."""
    if not state.tokens:
        return False
    last = state.tokens[-1]
    return last.type == "html_inline" and _OPEN_HTML_TAG.match(last.content) is not None


class MathPlugin:
    """Plugin adding $math$, $$math$$ and bare environment support.

    Inline math uses $...$ syntax; $$...$$ inside running text renders as
    display math. Block math uses $$ on its own lines. With
    ``enable_bare_blocks``, ``\\begin{..}``/``\\end{..}`` environments are
    recognized without delimiters.

    """

    __slots__ = ("config", "renderer")

    def __init__(
        self,
        config: MathConfig | Mapping[str, Any] | None = None,
        *,
        typesetter: Typesetter | None = None,
        **options: Any,
    ) -> None:
        """Initialize plugin.

        Args:
            config: MathConfig, or a mapping accepted by MathConfig.from_dict
            typesetter: Replacement for the default latex2mathml typesetter
            **options: Individual config fields, applied on top of config

        Raises:
            PluginError: If config or typesetter is of the wrong type
        """
        self.config = _resolve_config(config, options)
        self.renderer = MathRenderer(self.config, typesetter=typesetter)

    @property
    def name(self) -> str:
        return PLUGIN_NAME

    def __call__(self, md: MarkdownIt) -> None:
        self.apply(md)

    def apply(self, md: MarkdownIt) -> None:
        """Install every rule on md."""
        self.extend_inline(md)
        self.extend_block(md)
        self.extend_core(md)
        self.extend_renderer(md)
        logger.debug(
            "Installed %s plugin (features: %s)",
            PLUGIN_NAME,
            ", ".join(self.config.enabled_features) or "none",
        )

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def extend_inline(self, md: MarkdownIt) -> None:
        """Register inline rules; the display variant is tried first."""
        md.inline.ruler.after("escape", "math_inline", self.inline_math_rule)
        md.inline.ruler.after("escape", "math_inline_block", self.inline_display_math_rule)
        if self.config.enable_bare_blocks:
            md.inline.ruler.before("text", "math_inline_bare_block", self.inline_bare_block_rule)

    def extend_block(self, md: MarkdownIt) -> None:
        md.block.ruler.after("blockquote", "math_block", self.block_rule, {"alt": BLOCK_ALT})

    def extend_core(self, md: MarkdownIt) -> None:
        """Register the HTML-block extraction passes, ``$$`` before ``$``."""
        if self.config.enable_math_block_in_html:
            md.core.ruler.push(BLOCK_IN_HTML.name, _extraction_rule(BLOCK_IN_HTML))
        if self.config.enable_math_inline_in_html:
            md.core.ruler.push(INLINE_IN_HTML.name, _extraction_rule(INLINE_IN_HTML))

    @staticmethod
    def inline_math_rule(state: StateInline, silent: bool) -> bool:
        if state.src[state.pos] != "$":
            return False
        if _inside_inline_html(state):
            return False
        result = scan_inline_math(state.src, state.pos)
        if result is None:
            return False
        return _apply_inline(state, result, silent)

    @staticmethod
    def inline_display_math_rule(state: StateInline, silent: bool) -> bool:
        result = scan_inline_display_math(state.src, state.pos)
        if result is None:
            return False
        return _apply_inline(state, result, silent)

    @staticmethod
    def inline_bare_block_rule(state: StateInline, silent: bool) -> bool:
        result = scan_inline_bare_block(state.src, state.pos)
        if result is None:
            return False
        return _apply_inline(state, result, silent)

    def block_rule(self, state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        """Try bare environments (when enabled), then ``$$`` blocks."""
        session = ScanSession.from_state(state)
        for probe, scan in self._block_scanners():
            if not probe(session, startLine):
                continue
            if silent:
                return True
            result = scan(session, startLine, endLine)
            if result is None:
                continue

            token = state.push(SpanKind.BLOCK.token_type, "math", 0)
            token.block = True
            token.content = result.span.content
            token.map = [startLine, result.next_line]
            token.markup = result.span.markup
            state.line = result.next_line
            return True
        return False

    def _block_scanners(self) -> Sequence[tuple[BlockProbe, BlockScanner]]:
        if self.config.enable_bare_blocks:
            return ((probe_bare_block, scan_bare_block), (probe_math_block, scan_math_block))
        return ((probe_math_block, scan_math_block),)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def extend_renderer(self, md: MarkdownIt) -> None:
        """Register render rules for every math token type."""
        renderer = self.renderer

        def render_math_inline(
            self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
        ) -> str:
            return renderer.render_inline(tokens[idx].content)

        def render_math_block(
            self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
        ) -> str:
            return renderer.render_block(tokens[idx].content)

        md.add_render_rule(SpanKind.INLINE.token_type, render_math_inline)
        for kind in (SpanKind.INLINE_BLOCK, SpanKind.BLOCK, SpanKind.INLINE_BARE_BLOCK):
            md.add_render_rule(kind.token_type, render_math_block)

        if self.config.enable_fenced_blocks:
            self._extend_fence(md)

    def _extend_fence(self, md: MarkdownIt) -> None:
        renderer = self.renderer
        original_fence = md.renderer.rules.get("fence")

        def render_fence(
            self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
        ) -> str:
            token = tokens[idx]
            if token.info.strip().lower() == MATH_FENCE_LANGUAGE:
                return renderer.render_block(token.content)
            if original_fence is None:
                return ""
            return original_fence(tokens, idx, options, env)

        md.add_render_rule("fence", render_fence)


def _extraction_rule(variant: EmbeddedVariant) -> Callable[[StateCore], None]:
    def rule(state: StateCore) -> None:
        state.tokens[:] = expand_html_blocks(state.tokens, variant)

    rule.__name__ = variant.name
    return rule


def math_plugin(
    md: MarkdownIt,
    config: MathConfig | Mapping[str, Any] | None = None,
    *,
    typesetter: Typesetter | None = None,
    **options: Any,
) -> None:
    """Install math support on md, for use with ``MarkdownIt.use``.

    Example:
        >>> md = MarkdownIt().use(math_plugin, {"enableBareBlocks": True})
        >>> md = MarkdownIt().use(math_plugin, throw_on_error=True)
    """
    MathPlugin(config, typesetter=typesetter, **options).apply(md)
