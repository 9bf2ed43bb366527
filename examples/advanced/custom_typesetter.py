"""Swap in another typesetter and inspect the recognized spans."""

import logging

from mathspan import Markdown, collect_math_tokens

logging.basicConfig(level=logging.WARNING)


def placeholder(latex: str, display_mode: bool, **options) -> str:
    """Emit KaTeX-style placeholders for client-side rendering."""
    if "\\undefined" in latex:
        raise ValueError(f"unknown command in {latex!r}")
    delimiter = ("\\[", "\\]") if display_mode else ("\\(", "\\)")
    return f'<span class="math">{delimiter[0]}{latex}{delimiter[1]}</span>'


md = Markdown(typesetter=placeholder, throw_on_error=True)

source = "Good: $a+b$. Bad: $\\undefined$. Display: $$x^2$$"

for token in collect_math_tokens(md.parse(source)):
    print(f"{token.type:<20} {token.markup:<3} {token.content!r}")

# The failing span becomes an error element and is logged at WARNING
print(md(source))
