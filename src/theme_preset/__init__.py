"""
theme-preset - multi-theme CSS variables for utility CSS generators.

Flattens named themes into CSS custom properties, tracks which ones the
generated utilities reference, and emits one selector block per theme.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .errors import ThemeConfigError, ThemePresetError
from .loader import load_preset_options, save_preset_options
from .preset import ThemePreset, create_theme_preset
from .specs.theme import PresetThemeOptions


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("theme-preset")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "PresetThemeOptions",
    "ThemeConfigError",
    "ThemePreset",
    "ThemePresetError",
    "create_theme_preset",
    "load_preset_options",
    "save_preset_options",
]
