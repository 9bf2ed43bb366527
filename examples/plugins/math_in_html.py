"""Math inside raw HTML blocks, plus ```math fences."""

from mathspan import Markdown, MathConfig

config = MathConfig.from_dict(
    {
        "enableMathBlockInHtml": True,
        "enableMathInlineInHtml": True,
        "enableFencedBlocks": True,
    }
)
md = Markdown(config)

source = """
<table>
<tr><td>$$a^2 + b^2 = c^2$$</td><td>Area: $\\pi r^2$</td></tr>
</table>

```math
\\sqrt{2}
```
"""

print(md(source))
