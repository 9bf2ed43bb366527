"""
mathspan: LaTeX math for markdown-it

Recognizes math written in Markdown and typesets it to MathML:

    $E = mc^2$                         inline math
    $$\\sum_i i$$                       display math inside a paragraph
    $$ ... $$ on their own lines        block math
    \\begin{align} ... \\end{align}      bare environments (opt-in)
    <div>$$x$$</div>                    math inside HTML blocks (opt-in)
    ```math ... ```                     math fences (opt-in)

Quick Start:
    >>> from mathspan import Markdown
    >>> md = Markdown()
    >>> html = md("Inline: $x^2$")

    >>> # Or install on your own MarkdownIt instance
    >>> from markdown_it import MarkdownIt
    >>> from mathspan import math_plugin
    >>> md = MarkdownIt("commonmark", {"html": True}).use(math_plugin, enable_bare_blocks=True)

Recognition follows markdown-it-katex: ``$`` must sit on a word boundary
to open or close, ``\\$`` is a literal dollar, and text that fails to form a
span is left exactly as written.

Installation:
    pip install mathspan
"""

from collections.abc import Mapping
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mathspan.config import DEFAULT_CONFIG, MathConfig
from mathspan.errors import MathRenderError, MathspanError, PluginError
from mathspan.plugin import MathPlugin, math_plugin
from mathspan.renderers import MathRenderer, Typesetter, latex2mathml_typesetter
from mathspan.spans import BlockScan, InlineScan, MathSpan, SpanKind

__version__ = "0.1.0"

MATH_TOKEN_TYPES = frozenset(kind.token_type for kind in SpanKind)


def create_markdown(
    config: MathConfig | Mapping[str, Any] | None = None,
    *,
    preset: str = "commonmark",
    html: bool = True,
    typesetter: Typesetter | None = None,
    **options: Any,
) -> MarkdownIt:
    """Create a MarkdownIt instance with math support installed.

    Args:
        config: MathConfig, or a mapping accepted by MathConfig.from_dict
        preset: markdown-it preset name
        html: Allow raw HTML (needed for math inside HTML blocks)
        typesetter: Replacement for the default latex2mathml typesetter
        **options: Individual MathConfig fields, applied on top of config

    Returns:
        Configured MarkdownIt instance
    """
    md = MarkdownIt(preset, {"html": html})
    MathPlugin(config, typesetter=typesetter, **options).apply(md)
    return md


class Markdown:
    """High-level Markdown processor with math support.

    Usage:
        >>> md = Markdown(enable_bare_blocks=True)
        >>> html = md("\\\\begin{align}\\nx &= 1\\n\\\\end{align}")

        >>> # Access the token stream
        >>> tokens = md.parse("$x$")
        >>> [t.type for t in tokens[1].children]
        ['math_inline']

    Thread Safety:
        Built once, then only read. Safe to use one instance concurrently
        from different threads.

    """

    __slots__ = ("_md", "_plugin")

    def __init__(
        self,
        config: MathConfig | Mapping[str, Any] | None = None,
        *,
        preset: str = "commonmark",
        html: bool = True,
        typesetter: Typesetter | None = None,
        **options: Any,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            config: MathConfig, or a mapping accepted by MathConfig.from_dict
            preset: markdown-it preset name
            html: Allow raw HTML (needed for math inside HTML blocks)
            typesetter: Replacement for the default latex2mathml typesetter
            **options: Individual MathConfig fields, applied on top of config
        """
        self._plugin = MathPlugin(config, typesetter=typesetter, **options)
        self._md = MarkdownIt(preset, {"html": html})
        self._plugin.apply(self._md)

    def __call__(self, source: str) -> str:
        """Parse and render Markdown in one call."""
        return self._md.render(source)

    def parse(self, source: str) -> list[Token]:
        """Parse Markdown source into markdown-it tokens."""
        return self._md.parse(source)

    @property
    def config(self) -> MathConfig:
        return self._plugin.config

    @property
    def markdown_it(self) -> MarkdownIt:
        """The underlying MarkdownIt instance."""
        return self._md


def collect_math_tokens(tokens: list[Token]) -> list[Token]:
    """Collect math tokens from a token stream, including inline children.

    Example:
        >>> [t.content for t in collect_math_tokens(Markdown().parse("$a$ and $b$"))]
        ['a', 'b']
    """
    found: list[Token] = []
    for token in tokens:
        if token.type in MATH_TOKEN_TYPES:
            found.append(token)
        if token.children:
            found.extend(collect_math_tokens(token.children))
    return found


__all__ = [
    "DEFAULT_CONFIG",
    "MATH_TOKEN_TYPES",
    "BlockScan",
    "InlineScan",
    "Markdown",
    "MathConfig",
    "MathPlugin",
    "MathRenderError",
    "MathRenderer",
    "MathSpan",
    "MathspanError",
    "PluginError",
    "SpanKind",
    "Typesetter",
    "__version__",
    "create_markdown",
    "collect_math_tokens",
    "latex2mathml_typesetter",
    "math_plugin",
]
