"""Inline and block math in a few lines, typeset to MathML."""

from mathspan import Markdown

md = Markdown()

html = md("Euler's identity: $e^{i\\pi} + 1 = 0$\n\n$$\n\\int_0^1 x^2\\,dx = \\frac{1}{3}\n$$")
print(html)
