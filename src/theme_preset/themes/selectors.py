"""Theme name -> CSS selector."""

from __future__ import annotations

from collections.abc import Mapping

from theme_preset.specs.theme import DEFAULT_THEME

ROOT_SELECTOR = ":root"


class SelectorResolver:
    """
    Resolves the selector that carries a theme's variables.

    Overrides win; otherwise the default theme binds to ``:root`` and every
    other theme to ``.<name>``.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self.selectors: dict[str, str] = {DEFAULT_THEME: ROOT_SELECTOR, **(overrides or {})}

    def resolve(self, theme_name: str) -> str:
        return self.selectors.get(theme_name) or f".{theme_name}"
