"""Immutable configuration for the math plugin.

One MathConfig is built when the plugin is installed on a MarkdownIt
instance and is captured by the rules it registers. Every flag defaults to
False: a missing flag means the behavior is disabled.

Thread Safety:
    MathConfig is frozen. Rules only read it, so one config can be shared by
    any number of concurrent parses.

Usage:
    from mathspan import MathConfig, create_markdown

    config = MathConfig(enable_bare_blocks=True)
    md = create_markdown(config)

    # Options written for the JavaScript plugin are accepted too
    config = MathConfig.from_dict({"enableBareBlocks": True, "throwOnError": True})

"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# camelCase option names used by markdown-it-katex
_OPTION_ALIASES: dict[str, str] = {
    "enableBareBlocks": "enable_bare_blocks",
    "enableMathBlockInHtml": "enable_math_block_in_html",
    "enableMathInlineInHtml": "enable_math_inline_in_html",
    "enableFencedBlocks": "enable_fenced_blocks",
    "throwOnError": "throw_on_error",
    "rendererOptions": "renderer_options",
}


@dataclass(frozen=True, slots=True)
class MathConfig:
    """Immutable math plugin configuration.

    Attributes:
        enable_bare_blocks: Recognize ``\\begin{..}``/``\\end{..}`` environments
            without ``$$`` delimiters
        enable_math_block_in_html: Extract ``$$..$$`` spans from HTML blocks
        enable_math_inline_in_html: Extract ``$..$`` spans from HTML blocks
        enable_fenced_blocks: Render ```` ```math ```` fences as block math
        throw_on_error: Report typesetter failures at WARNING level with a
            traceback instead of DEBUG
        renderer_options: Keyword arguments forwarded to the typesetter

    """

    enable_bare_blocks: bool = False
    enable_math_block_in_html: bool = False
    enable_math_inline_in_html: bool = False
    enable_fenced_blocks: bool = False
    throw_on_error: bool = False
    renderer_options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(
        cls, config_dict: Mapping[str, Any], base: MathConfig | None = None
    ) -> MathConfig:
        """Create MathConfig from a dictionary.

        Accepts both snake_case field names and the camelCase option names of
        markdown-it-katex. Unknown keys are silently ignored.

        Args:
            config_dict: Dictionary with config values.
            base: Config whose values are kept for keys not in the dict
                (defaults used if None)

        Returns:
            New MathConfig instance with values from dict.

        Example:
            >>> config = MathConfig.from_dict({
            ...     "enableBareBlocks": True,
            ...     "throw_on_error": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.enable_bare_blocks, config.throw_on_error
            (True, True)

        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in valid_fields:
                filtered[name] = value
        if base is not None:
            return dataclasses.replace(base, **filtered)
        return cls(**filtered)

    def with_options(self, **changes: Any) -> MathConfig:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @property
    def enabled_features(self) -> tuple[str, ...]:
        """Names of the optional behaviors switched on, for logging."""
        return tuple(
            f.name
            for f in dataclasses.fields(self)
            if f.name.startswith("enable_") and getattr(self, f.name)
        )


DEFAULT_CONFIG: MathConfig = MathConfig()


__all__ = [
    "DEFAULT_CONFIG",
    "MathConfig",
]
