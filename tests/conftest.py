"""Shared fixtures for mathspan tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from mathspan import Markdown


def tagging_typesetter(latex: str, display_mode: bool, **options: Any) -> str:
    """Stand-in typesetter whose output shows the mode and the exact source."""
    return f"[{'D' if display_mode else 'I'}:{latex}]"


@pytest.fixture
def typesetter() -> Callable[..., str]:
    return tagging_typesetter


@pytest.fixture
def render() -> Callable[..., str]:
    """Render Markdown with the tagging typesetter and the given options."""

    def _render(source: str, **options: Any) -> str:
        return Markdown(typesetter=tagging_typesetter, **options)(source)

    return _render
