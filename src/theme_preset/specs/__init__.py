"""Specification types for theme-preset."""

from .theme import (
    DEFAULT_PREFIX,
    DEFAULT_THEME,
    ParsedColor,
    PresetThemeOptions,
    UsedKeyRecord,
    ValueKind,
    VariableBinding,
)

__all__ = [
    "DEFAULT_PREFIX",
    "DEFAULT_THEME",
    "ParsedColor",
    "PresetThemeOptions",
    "UsedKeyRecord",
    "ValueKind",
    "VariableBinding",
]
