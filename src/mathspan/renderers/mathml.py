"""Span renderer adapter: recognized math to presentation markup.

The typesetter is any callable ``(latex, display_mode, **options) -> str``.
The default wraps latex2mathml and produces MathML, which browsers render
natively. A typesetter failure never escapes: it becomes a visible error
element carrying the original source in its ``title`` attribute.

Output:
    inline  <math ...>...</math>
    block   <p class="math-block"><math display="block" ...>...</math></p>
    error   <span class="math-error" title="\\frac{1}">MissingDenominator...</span>

"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from latex2mathml.converter import convert

from mathspan.config import DEFAULT_CONFIG, MathConfig
from mathspan.errors import MathRenderError, PluginError
from mathspan.utils.logger import get_logger
from mathspan.utils.text import escape_html

logger = get_logger(__name__)

Typesetter = Callable[..., str]

# Inline content using one of these environments needs display mode to lay out
DISPLAY_ENVIRONMENTS = re.compile(
    r"\\begin\{(align|equation|gather|cd|alignat)\}", re.IGNORECASE
)


def latex2mathml_typesetter(latex: str, display_mode: bool, **options: Any) -> str:
    """Typeset LaTeX to MathML with latex2mathml."""
    return convert(latex, display="block" if display_mode else "inline", **options)


class MathRenderer:
    """Render math spans through a typesetter.

    Usage:
        >>> renderer = MathRenderer()
        >>> renderer.render("x^2", is_block=False)  # doctest: +ELLIPSIS
        '<math ...'

    Thread Safety:
        Holds only the frozen config and the typesetter. Safe to share as
        long as the typesetter itself is.

    """

    __slots__ = ("_config", "_options", "_typesetter")

    def __init__(
        self,
        config: MathConfig | None = None,
        typesetter: Typesetter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            config: Plugin configuration (defaults used if None)
            typesetter: Replacement for the latex2mathml typesetter

        Raises:
            PluginError: If typesetter is not callable or the configured
                renderer options are not a mapping
        """
        self._config = config or DEFAULT_CONFIG
        if typesetter is not None and not callable(typesetter):
            raise PluginError(
                "math", f"typesetter must be callable, got {type(typesetter).__name__}"
            )
        if not isinstance(self._config.renderer_options, Mapping):
            raise PluginError("math", "renderer_options must be a mapping")
        self._typesetter = typesetter or latex2mathml_typesetter
        self._options = dict(self._config.renderer_options)

    @staticmethod
    def display_mode(content: str, is_block: bool) -> bool:
        """Whether content should be typeset on its own line.

        Block spans always are. Inline spans are when they span several lines
        or use a multi-line environment such as ``align``.
        """
        if is_block:
            return True
        return "\n" in content or DISPLAY_ENVIRONMENTS.search(content) is not None

    def typeset(self, content: str, display_mode: bool) -> str:
        """Call the typesetter, wrapping any failure in MathRenderError."""
        try:
            return self._typesetter(content, display_mode, **self._options)
        except Exception as exc:
            # Typesetters raise their own exception types for malformed input
            raise MathRenderError(content, f"{type(exc).__name__}: {exc}", display_mode) from exc

    def render_inline(self, content: str) -> str:
        """Render an inline span; the result has no wrapper element."""
        try:
            return self.typeset(content, self.display_mode(content, is_block=False))
        except MathRenderError as exc:
            self._report(exc)
            return (
                f'<span class="math-error" title="{escape_html(content)}">'
                f"{escape_html(exc.message)}</span>"
            )

    def render_block(self, content: str) -> str:
        """Render a block span as its own paragraph-level element."""
        try:
            body = self.typeset(content, display_mode=True)
        except MathRenderError as exc:
            self._report(exc)
            return (
                f'<p class="math-block math-error" title="{escape_html(content)}">'
                f"{escape_html(exc.message)}</p>\n"
            )
        return f'<p class="math-block">{body}</p>\n'

    def render(self, content: str, is_block: bool) -> str:
        if is_block:
            return self.render_block(content)
        return self.render_inline(content)

    def _report(self, exc: MathRenderError) -> None:
        if self._config.throw_on_error:
            logger.warning("%s (source: %r)", exc, exc.content, exc_info=exc)
        else:
            logger.debug("%s (source: %r)", exc, exc.content)
