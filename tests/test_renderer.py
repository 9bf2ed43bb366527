"""Tests for the span renderer adapter."""

from __future__ import annotations

import logging

import pytest

from mathspan.config import MathConfig
from mathspan.errors import MathRenderError, PluginError
from mathspan.renderers.mathml import MathRenderer, latex2mathml_typesetter


def recording_typesetter(calls: list):
    def typeset(latex: str, display_mode: bool, **options) -> str:
        calls.append((latex, display_mode, options))
        return f"<m display={display_mode}>{latex}</m>"

    return typeset


def failing_typesetter(latex: str, display_mode: bool, **options) -> str:
    raise ValueError("unbalanced braces")


class TestDisplayMode:
    """Choosing inline or display typesetting."""

    def test_block_is_always_display(self) -> None:
        assert MathRenderer.display_mode("x", is_block=True)

    def test_plain_inline(self) -> None:
        assert not MathRenderer.display_mode("x + y", is_block=False)

    def test_inline_with_newline(self) -> None:
        assert MathRenderer.display_mode("a\nb", is_block=False)

    @pytest.mark.parametrize("env", ["align", "equation", "gather", "CD", "alignat"])
    def test_inline_with_display_environment(self, env: str) -> None:
        assert MathRenderer.display_mode(f"\\begin{{{env}}} x \\end{{{env}}}", is_block=False)

    def test_inline_with_other_environment(self) -> None:
        assert not MathRenderer.display_mode("\\begin{matrix} 1 \\end{matrix}", is_block=False)


class TestRendering:
    """Markup produced around the typesetter output."""

    def test_inline_has_no_wrapper(self) -> None:
        calls: list = []
        renderer = MathRenderer(typesetter=recording_typesetter(calls))
        assert renderer.render_inline("x") == "<m display=False>x</m>"
        assert calls == [("x", False, {})]

    def test_block_wrapped_in_paragraph(self) -> None:
        renderer = MathRenderer(typesetter=recording_typesetter([]))
        assert renderer.render_block("x") == '<p class="math-block"><m display=True>x</m></p>\n'

    def test_render_dispatches_on_is_block(self) -> None:
        renderer = MathRenderer(typesetter=recording_typesetter([]))
        assert renderer.render("x", is_block=True).startswith('<p class="math-block">')
        assert renderer.render("x", is_block=False).startswith("<m ")

    def test_multiline_inline_typeset_in_display_mode(self) -> None:
        calls: list = []
        MathRenderer(typesetter=recording_typesetter(calls)).render_inline("a\nb")
        assert calls[0][1] is True

    def test_renderer_options_forwarded(self) -> None:
        calls: list = []
        config = MathConfig(renderer_options={"macros": {"\\R": "\\mathbb{R}"}})
        MathRenderer(config, typesetter=recording_typesetter(calls)).render_inline("x")
        assert calls[0][2] == {"macros": {"\\R": "\\mathbb{R}"}}


class TestErrorFallback:
    """Typesetter failures become visible error elements."""

    def test_inline_error_element(self) -> None:
        renderer = MathRenderer(typesetter=failing_typesetter)
        html = renderer.render_inline("\\frac{1}")
        assert html.startswith('<span class="math-error" title="\\frac{1}">')
        assert "ValueError: unbalanced braces" in html
        assert html.endswith("</span>")

    def test_block_error_element(self) -> None:
        renderer = MathRenderer(typesetter=failing_typesetter)
        html = renderer.render_block("x")
        assert html.startswith('<p class="math-block math-error" title="x">')
        assert html.endswith("</p>\n")

    def test_source_is_escaped(self) -> None:
        renderer = MathRenderer(typesetter=failing_typesetter)
        html = renderer.render_inline('a < b & "c"')
        assert 'title="a &lt; b &amp; &quot;c&quot;"' in html

    def test_typeset_wraps_exception(self) -> None:
        renderer = MathRenderer(typesetter=failing_typesetter)
        with pytest.raises(MathRenderError) as exc_info:
            renderer.typeset("x", display_mode=True)
        assert exc_info.value.content == "x"
        assert exc_info.value.display_mode is True
        assert "display" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_failure_logged_at_debug_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        renderer = MathRenderer(typesetter=failing_typesetter)
        with caplog.at_level(logging.DEBUG, logger="mathspan"):
            renderer.render_inline("x")
        records = [r for r in caplog.records if r.name == "mathspan.renderers.mathml"]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_throw_on_error_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        renderer = MathRenderer(MathConfig(throw_on_error=True), typesetter=failing_typesetter)
        with caplog.at_level(logging.DEBUG, logger="mathspan"):
            html = renderer.render_inline("x")
        assert "math-error" in html
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].exc_info is not None


class TestRendererInit:
    def test_non_callable_typesetter(self) -> None:
        with pytest.raises(PluginError, match="typesetter must be callable"):
            MathRenderer(typesetter="katex")  # type: ignore[arg-type]

    def test_renderer_options_must_be_mapping(self) -> None:
        with pytest.raises(PluginError, match="renderer_options"):
            MathRenderer(MathConfig(renderer_options=["x"]))  # type: ignore[arg-type]


class TestLatex2MathML:
    """The default typesetter."""

    def test_inline_mathml(self) -> None:
        html = latex2mathml_typesetter("x^2", display_mode=False)
        assert html.startswith("<math")
        assert 'display="inline"' in html
        assert "<msup>" in html

    def test_block_mathml(self) -> None:
        html = latex2mathml_typesetter("x", display_mode=True)
        assert 'display="block"' in html

    def test_default_renderer_uses_mathml(self) -> None:
        html = MathRenderer().render_block("a+b")
        assert html.startswith('<p class="math-block"><math')
        assert 'display="block"' in html
