"""LaTeX environments without $$, as written in papers and notebooks."""

from markdown_it import MarkdownIt

from mathspan import math_plugin

md = MarkdownIt("commonmark").use(math_plugin, enable_bare_blocks=True)

source = """
The system below has one solution.

\\begin{cases}
x + y = 2 \\\\
x - y = 0
\\end{cases}

It also works directly after a line of text:
\\begin{matrix}
1 & 0 \\\\
0 & 1
\\end{matrix}
"""

print(md.render(source))
