"""Shared pytest fixtures for theme-preset tests."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import pytest

from theme_preset.runtime import Rule, RuleContext

# =============================================================================
# Utility rules standing in for a real utility set
# =============================================================================


def _lookup_color(theme: Mapping[str, Any], name: str) -> str | None:
    colors = theme.get("colors", {})
    value = colors.get(name)
    if value is None and "-" in name:
        group, _, shade = name.partition("-")
        nested = colors.get(group)
        if isinstance(nested, dict):
            value = nested.get(shade)
    return value if isinstance(value, str) else None


def _text_color(match: re.Match[str], context: RuleContext) -> dict[str, str] | None:
    value = _lookup_color(context.theme, match.group(1))
    return {"color": value} if value else None


def _bg_color(match: re.Match[str], context: RuleContext) -> dict[str, str] | None:
    value = _lookup_color(context.theme, match.group(1))
    return {"background-color": value} if value else None


def _font_family(match: re.Match[str], context: RuleContext) -> dict[str, str] | None:
    value = context.theme.get("fontFamily", {}).get(match.group(1))
    if isinstance(value, list):
        value = ", ".join(value)
    return {"font-family": value} if value else None


@pytest.fixture
def utility_rules() -> list[Rule]:
    """text-*, bg-* and font-* rules reading from the resolved theme."""
    return [
        Rule(pattern=re.compile(r"^text-(.+)$"), handler=_text_color),
        Rule(pattern=re.compile(r"^bg-(.+)$"), handler=_bg_color),
        Rule(pattern=re.compile(r"^font-(.+)$"), handler=_font_family),
    ]


# =============================================================================
# Theme sets
# =============================================================================


@pytest.fixture
def round_trip_themes() -> dict[str, Any]:
    """Two themes that disagree on a single color."""
    return {
        "light": {"colors": {"primary": "#ff0000"}},
        "dark": {"colors": {"primary": "#00ff00"}},
    }


@pytest.fixture
def full_themes() -> dict[str, Any]:
    """Themes exercising colors, images, sequences and plain values."""
    return {
        "light": {
            "colors": {
                "primary": "#ff0000",
                "secondary": "rgb(0, 0, 255)",
                "hero": "url(/light.png)",
                "overlay": "rgba(0, 0, 0, 0.5)",
            },
            "fontFamily": {"sans": ["Inter", "sans-serif"]},
            "spacing": {"md": "1rem"},
        },
        "dark": {
            "colors": {
                "primary": "#00ff00",
                "secondary": "inherit",
                "hero": "url(/dark.png)",
            },
        },
    }
