"""
Theme flattening and variable binding.

Usage:
    from theme_preset.themes import ThemeFlattener, SelectorResolver

    result = ThemeFlattener(
        {"light": {"colors": {"primary": "#ff0000"}}},
        prefix="--un-preset-theme",
    ).flatten()
    result.tree  # {"colors": {"primary": "rgb(var(--un-preset-theme-colors-primary), 1)"}}
"""

from .classifier import Classification, classify_value
from .emitter import PRESET_THEME_RULE, THEME_LAYER, ThemeCSSEmitter, reshape_block, theme_token
from .flattener import FlattenResult, ThemeFlattener
from .key_export import build_key_records, write_key_file
from .naming import allocate_name
from .registry import BindingRegistry
from .selectors import ROOT_SELECTOR, SelectorResolver
from .usage import UsageTracker

__all__ = [
    # Flattening
    "Classification",
    "FlattenResult",
    "ThemeFlattener",
    "allocate_name",
    "classify_value",
    # Bindings and usage
    "BindingRegistry",
    "UsageTracker",
    # Emission
    "PRESET_THEME_RULE",
    "ROOT_SELECTOR",
    "SelectorResolver",
    "THEME_LAYER",
    "ThemeCSSEmitter",
    "reshape_block",
    "theme_token",
    # Key file
    "build_key_records",
    "write_key_file",
]
