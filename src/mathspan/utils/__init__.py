"""Utility modules for mathspan.

Provides:
- text: escape_html, is_blank
- logger: get_logger for logging
"""

from mathspan.utils.logger import get_logger
from mathspan.utils.text import escape_html, is_blank

__all__ = [
    "escape_html",
    "get_logger",
    "is_blank",
]
