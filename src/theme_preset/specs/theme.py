"""
Theme preset specification types.

Defines the preset options, parsed colors, variable bindings and the
records written to the used-key side file.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PREFIX = "--un-preset-theme"
DEFAULT_THEME = "light"
DEFAULT_KEY_FILE = Path("src") / "theme-keys" / "default.json"


# =============================================================================
# Enums
# =============================================================================


class ValueKind(StrEnum):
    """Classification of a theme leaf value."""

    PLAIN = "plain"
    COLOR = "color"
    BACKGROUND_IMAGE = "background_image"


# =============================================================================
# Colors
# =============================================================================


def format_component(component: str | int | float) -> str:
    """Render a color component the way CSS expects it (no trailing .0)."""
    if isinstance(component, float) and component.is_integer():
        return str(int(component))
    return str(component)


class ParsedColor(BaseModel):
    """
    A CSS color split into its function type, components and alpha.

    Example:
        ParsedColor(type="rgb", components=[255, 0, 0], alpha=None)
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(description="Color function name (rgb, hsl, oklch, ...)")
    components: list[str | int | float] = Field(description="Channel values")
    alpha: str | int | float | None = Field(default=None, description="Alpha, if given")

    def joined_components(self) -> str:
        """Channels joined with ', ' for use inside a color function."""
        return ", ".join(format_component(c) for c in self.components)


# =============================================================================
# Bindings
# =============================================================================


class VariableBinding(BaseModel):
    """
    One CSS variable and the value each theme assigns to it.

    Themes without a value for the variable are absent from ``values`` and
    fall back to the cascade.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="CSS custom property name, e.g. --un-preset-theme-colors-primary")
    values: dict[str, str] = Field(
        default_factory=dict, description="Theme name -> resolved value"
    )

    def for_theme(self, theme_name: str) -> dict[str, str]:
        """Single-key declaration mapping for a theme, empty when unset."""
        if theme_name not in self.values:
            return {}
        return {self.name: self.values[theme_name]}


class UsedKeyRecord(BaseModel):
    """Entry of the used-key side file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str
    name: str
    variable_name: str = Field(alias="variableName")
    default_value: str | None = Field(default=None, alias="defaultValue")


# =============================================================================
# Options
# =============================================================================


def _normalize_tree(node: Any, path: str) -> Any:
    """Validate a theme subtree, turning integer keys (YAML shade scales) into strings."""
    if isinstance(node, dict):
        normalized: dict[str, Any] = {}
        for key, value in node.items():
            if isinstance(key, bool) or not isinstance(key, str | int):
                raise ValueError(f"{path}: keys must be strings or integers, got {key!r}")
            normalized[str(key)] = _normalize_tree(value, f"{path}.{key}")
        return normalized
    if isinstance(node, list):
        for index, item in enumerate(node):
            if not isinstance(item, str):
                raise ValueError(f"{path}[{index}]: list items must be strings, got {item!r}")
        return list(node)
    if isinstance(node, bool) or not isinstance(node, str | int | float):
        raise ValueError(f"{path}: unsupported theme value {node!r}")
    return node


class PresetThemeOptions(BaseModel):
    """
    Options for the theme preset.

    Example:
        PresetThemeOptions(
            theme={
                "dark": {"colors": {"primary": "#00ff00"}},
                "light": {"colors": {"primary": "#ff0000"}},
            },
            selectors={"dark": '[data-theme="dark"]'},
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    theme: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        validate_default=True,
        description="Theme name -> nested theme mapping",
    )
    prefix: str = Field(default=DEFAULT_PREFIX, description="Prefix of the generated variables")
    selectors: dict[str, str] = Field(
        default_factory=dict, description="Theme name -> selector overrides"
    )
    generate_key: bool = Field(
        default=False, description="Write the used-key side file on every emission"
    )
    key_file: Path = Field(default=DEFAULT_KEY_FILE, description="Path of the used-key side file")

    @field_validator("theme")
    @classmethod
    def _ensure_default_theme(cls, value: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
        value = {theme_name: _normalize_tree(tree, theme_name) for theme_name, tree in value.items()}
        if DEFAULT_THEME not in value:
            value = {**value, DEFAULT_THEME: {}}
        return value

    @property
    def theme_names(self) -> list[str]:
        return list(self.theme)
