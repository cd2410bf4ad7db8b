"""
Theme preset persistence layer.

Reads and writes preset options from themes.yaml in the project root.

Default location: {project_root}/themes.yaml

Example themes.yaml::

    prefix: --app-theme
    selectors:
      dark: '[data-theme="dark"]'
    theme:
      light:
        colors:
          primary: "#ff0000"
      dark:
        colors:
          primary: "#00ff00"
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ThemeConfigError
from .specs.theme import PresetThemeOptions

logger = logging.getLogger(__name__)

THEME_FILE = "themes.yaml"


# =============================================================================
# Path helpers
# =============================================================================


def get_theme_file_path(project_root: Path) -> Path:
    """Get the themes.yaml file path."""
    return project_root / THEME_FILE


def theme_file_exists(project_root: Path) -> bool:
    """Check if a themes.yaml exists in the project."""
    return get_theme_file_path(project_root).exists()


# =============================================================================
# Loading
# =============================================================================


def load_preset_options(project_root: Path, *, use_defaults: bool = True) -> PresetThemeOptions:
    """
    Load preset options from themes.yaml.

    Args:
        project_root: Root directory of the project.
        use_defaults: If True, return default options when the file is missing or empty.

    Returns:
        PresetThemeOptions instance.

    Raises:
        ThemeConfigError: If the file is missing (when use_defaults=False) or invalid.
    """
    theme_path = get_theme_file_path(project_root)

    if not theme_path.exists():
        if use_defaults:
            logger.debug("No themes.yaml found, using defaults")
            return PresetThemeOptions()
        raise ThemeConfigError(f"Theme file not found: {theme_path}")

    try:
        data = yaml.safe_load(theme_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ThemeConfigError(f"Invalid YAML in {theme_path}: {e}") from e
    except OSError as e:
        raise ThemeConfigError(f"Cannot read {theme_path}: {e}") from e

    if not data:
        if use_defaults:
            logger.warning("Empty themes.yaml at %s, using defaults", theme_path)
            return PresetThemeOptions()
        raise ThemeConfigError(f"Empty or invalid YAML in {theme_path}")

    if not isinstance(data, dict):
        raise ThemeConfigError(f"Expected a mapping at the top of {theme_path}")

    try:
        return PresetThemeOptions(**data)
    except ValidationError as e:
        raise ThemeConfigError(f"Invalid theme options in {theme_path}: {e}") from e


def save_preset_options(project_root: Path, options: PresetThemeOptions) -> Path:
    """
    Save preset options to themes.yaml.

    Returns:
        Path to the saved themes.yaml file.
    """
    theme_path = get_theme_file_path(project_root)
    data = options.model_dump(mode="json")

    theme_path.write_text(
        yaml.dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        ),
        encoding="utf-8",
    )

    logger.info("Saved theme options to %s", theme_path)
    return theme_path
