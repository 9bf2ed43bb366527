"""Exception classes for mathspan.

Recognition never raises: a delimiter that cannot form a span degrades to
literal text. Exceptions exist for the two places where something outside
the scanners can go wrong, the typesetter and plugin installation.
"""

from __future__ import annotations


class MathspanError(Exception):
    """Base exception for all mathspan errors.

    Subclass this for specific error categories.
    """

    pass


class MathRenderError(MathspanError):
    """The typesetter rejected a recognized span.

    Raised inside the renderer adapter and converted to an inline error
    element before it reaches the document render.
    """

    def __init__(self, content: str, message: str, display_mode: bool = False) -> None:
        """Initialize render error.

        Args:
            content: Raw LaTeX content of the span
            message: Error text reported by the typesetter
            display_mode: Whether the span was being typeset in display mode
        """
        self.content = content
        self.message = message
        self.display_mode = display_mode

        mode = "display" if display_mode else "inline"
        super().__init__(f"Failed to typeset {mode} math: {message}")


class PluginError(MathspanError):
    """Error in plugin initialization.

    Raised when the math plugin is installed with invalid arguments.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
