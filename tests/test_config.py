"""Tests for MathConfig."""

from __future__ import annotations

import dataclasses

import pytest

from mathspan import DEFAULT_CONFIG, Markdown, MathConfig


class TestMathConfigDataclass:
    """Frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Every optional behavior is off by default."""
        config = MathConfig()
        assert config.enable_bare_blocks is False
        assert config.enable_math_block_in_html is False
        assert config.enable_math_inline_in_html is False
        assert config.enable_fenced_blocks is False
        assert config.throw_on_error is False
        assert config.renderer_options == {}

    def test_immutability(self) -> None:
        config = MathConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.enable_bare_blocks = True  # type: ignore[misc]

    def test_default_config_is_default(self) -> None:
        assert DEFAULT_CONFIG == MathConfig()

    def test_renderer_options_not_shared(self) -> None:
        assert MathConfig().renderer_options is not MathConfig().renderer_options


class TestFromDict:
    """MathConfig.from_dict."""

    def test_snake_case_keys(self) -> None:
        config = MathConfig.from_dict({"enable_bare_blocks": True, "throw_on_error": True})
        assert config.enable_bare_blocks is True
        assert config.throw_on_error is True

    def test_camel_case_keys(self) -> None:
        config = MathConfig.from_dict(
            {
                "enableBareBlocks": True,
                "enableMathBlockInHtml": True,
                "enableMathInlineInHtml": True,
                "enableFencedBlocks": True,
                "throwOnError": True,
                "rendererOptions": {"xmlns": ""},
            }
        )
        assert config.enabled_features == (
            "enable_bare_blocks",
            "enable_math_block_in_html",
            "enable_math_inline_in_html",
            "enable_fenced_blocks",
        )
        assert config.throw_on_error is True
        assert config.renderer_options == {"xmlns": ""}

    def test_unknown_keys_ignored(self) -> None:
        config = MathConfig.from_dict({"unknown": 1, "katexOptions": {}})
        assert config == MathConfig()

    def test_empty_dict(self) -> None:
        assert MathConfig.from_dict({}) == MathConfig()

    def test_base_values_kept(self) -> None:
        base = MathConfig(enable_bare_blocks=True, throw_on_error=True)
        config = MathConfig.from_dict({"throwOnError": False}, base=base)
        assert config.enable_bare_blocks is True
        assert config.throw_on_error is False
        assert base.throw_on_error is True


class TestWithOptions:
    def test_replaces_fields(self) -> None:
        config = MathConfig().with_options(enable_fenced_blocks=True)
        assert config.enable_fenced_blocks is True
        assert config.enable_bare_blocks is False

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(TypeError):
            MathConfig().with_options(bogus=True)


class TestEnabledFeatures:
    def test_none(self) -> None:
        assert MathConfig().enabled_features == ()

    def test_throw_on_error_is_not_a_feature(self) -> None:
        assert MathConfig(throw_on_error=True).enabled_features == ()

    def test_some(self) -> None:
        config = MathConfig(enable_fenced_blocks=True, enable_bare_blocks=True)
        assert config.enabled_features == ("enable_bare_blocks", "enable_fenced_blocks")


class TestConfigResolution:
    """How Markdown combines a config with keyword options."""

    def test_mapping_config(self) -> None:
        md = Markdown({"enableBareBlocks": True})
        assert md.config.enable_bare_blocks is True

    def test_keywords_only(self) -> None:
        md = Markdown(enable_fenced_blocks=True)
        assert md.config == MathConfig(enable_fenced_blocks=True)

    def test_keywords_layer_on_config(self) -> None:
        md = Markdown(MathConfig(enable_bare_blocks=True), throwOnError=True)
        assert md.config.enable_bare_blocks is True
        assert md.config.throw_on_error is True

    def test_config_instance_reused(self) -> None:
        config = MathConfig(enable_bare_blocks=True)
        assert Markdown(config).config is config
