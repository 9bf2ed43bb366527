"""Text helpers shared by the renderer adapter.

Example:
    >>> from mathspan.utils.text import escape_html
    >>> escape_html('a < b & "c"')
    'a &lt; b &amp; &quot;c&quot;'
"""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in text and attributes.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text safe for use in attribute values

    Examples:
        >>> escape_html("\\\\frac{1}{<x>}")
        '\\\\frac{1}{&lt;x&gt;}'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("'", "&#x27;")


def is_blank(text: str) -> bool:
    """Return True when text is empty or whitespace only."""
    return not text or text.isspace()
