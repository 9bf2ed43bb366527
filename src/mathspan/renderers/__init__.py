"""Renderers turning recognized spans into presentation markup."""

from mathspan.renderers.mathml import (
    DISPLAY_ENVIRONMENTS,
    MathRenderer,
    Typesetter,
    latex2mathml_typesetter,
)

__all__ = [
    "DISPLAY_ENVIRONMENTS",
    "MathRenderer",
    "Typesetter",
    "latex2mathml_typesetter",
]
