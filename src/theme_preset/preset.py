"""
Theme preset.

Wires the flattener, usage tracker, selector resolver and emitter into the
rule/variant/layer/preflight/postprocess surface a host generator expects.

Usage::

    from theme_preset import create_theme_preset
    from theme_preset.runtime import UtilityGenerator

    preset = create_theme_preset(
        theme={
            "dark": {"colors": {"primary": "#00ff00"}},
            "light": {"colors": {"primary": "#ff0000"}},
        },
    )
    generator = UtilityGenerator(presets=[preset], rules=[...])
    css = (await generator.generate(["text-primary"])).css
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ThemeConfigError
from .runtime.host import (
    DEFAULT_LAYER,
    Preflight,
    PreflightContext,
    Rule,
    RuleContext,
    Utility,
    Variant,
    VariantMatch,
)
from .specs.theme import PresetThemeOptions, VariableBinding
from .themes.emitter import PRESET_THEME_RULE, THEME_LAYER, ThemeCSSEmitter
from .themes.flattener import FlattenResult, ThemeFlattener
from .themes.key_export import write_key_file
from .themes.registry import BindingRegistry
from .themes.selectors import SelectorResolver
from .themes.usage import UsageTracker
from .utils.merge import merge_deep

logger = logging.getLogger(__name__)

PRESET_NAME = "theme-preset"

_THEME_RULE_RE = re.compile(rf"^{PRESET_THEME_RULE}:(.*):")
_THEME_NAME_RE = re.compile(rf"{PRESET_THEME_RULE}:([\w-]+):\d+")


class ThemePreset:
    """Multi-theme CSS variables for a utility generator."""

    name = PRESET_NAME

    def __init__(self, options: PresetThemeOptions) -> None:
        self.options = options
        self.theme_names = options.theme_names
        self.resolver = SelectorResolver(options.selectors)
        self.emitter = ThemeCSSEmitter(self.theme_names)
        self.flattened: FlattenResult | None = None
        self.usage = UsageTracker(BindingRegistry(), options.prefix)
        self.pending_exports: set[asyncio.Future[Path | None]] = set()

        self.rules = [Rule(pattern=_THEME_RULE_RE, handler=self._theme_rule)]
        self.variants = [Variant(name="preset-theme-rule", match=self._match_theme_variant)]
        self.layers = {THEME_LAYER: 0, DEFAULT_LAYER: 1}
        self.preflights = [Preflight(get_css=self._theme_preflight, layer=THEME_LAYER)]

    # -------------------------------------------------------------------------
    # Host hooks
    # -------------------------------------------------------------------------

    def extend_theme(self, theme: dict[str, Any]) -> dict[str, Any]:
        """Replace theme leaves with variable references over the host theme."""
        flattener = ThemeFlattener(self.options.theme, self.options.prefix)
        self.flattened = flattener.flatten(theme)
        self.usage = UsageTracker(
            self.flattened.registry,
            self.options.prefix,
            self.flattened.background_images,
        )
        return merge_deep(theme, self.flattened.tree)

    def postprocess(self, utility: Utility) -> None:
        self.usage.observe(utility)

    def _theme_rule(self, match: re.Match[str], context: RuleContext) -> dict[str, str] | None:
        theme_name = match.group(1)
        if not theme_name:
            return None
        return self.usage.declarations(theme_name)

    def _match_theme_variant(self, matcher: str) -> VariantMatch | None:
        found = _THEME_NAME_RE.search(matcher)
        if not found:
            return None
        selector = self.resolver.resolve(found.group(1))
        return VariantMatch(matcher=matcher, selector=lambda _: selector)

    async def _theme_preflight(self, context: PreflightContext) -> str:
        css = await self.emitter.emit(context.generator)
        if self.options.generate_key:
            self._export_keys(self.usage.snapshot())
        self.usage.clear()
        return css

    # -------------------------------------------------------------------------
    # Key export
    # -------------------------------------------------------------------------

    def _export_keys(self, bindings: list[VariableBinding]) -> None:
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            None, write_key_file, bindings, self.options.prefix, self.options.key_file
        )
        self.pending_exports.add(future)
        future.add_done_callback(self._export_done)

    def _export_done(self, future: asyncio.Future[Path | None]) -> None:
        self.pending_exports.discard(future)
        if not future.cancelled() and future.exception() is not None:
            logger.error("Theme key export failed: %s", future.exception())

    async def wait_for_exports(self) -> None:
        """Wait for key-file writes started by earlier emissions."""
        if self.pending_exports:
            await asyncio.gather(*self.pending_exports, return_exceptions=True)


def create_theme_preset(
    options: PresetThemeOptions | dict[str, Any] | None = None, **kwargs: Any
) -> ThemePreset:
    """
    Build a ThemePreset from options or keyword arguments.

    Raises:
        ThemeConfigError: If the options do not validate
    """
    if isinstance(options, PresetThemeOptions):
        return ThemePreset(options)
    try:
        return ThemePreset(PresetThemeOptions(**{**(options or {}), **kwargs}))
    except ValidationError as e:
        raise ThemeConfigError(f"Invalid theme preset options: {e}") from e
