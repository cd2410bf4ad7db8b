"""
Reference utility CSS generator.

A small host for presets: it resolves the theme through each preset's
``extend_theme``, matches variants and rules per token, runs postprocess
hooks, renders preflights and assembles layered CSS text.

Usage::

    generator = UtilityGenerator(
        theme={"colors": {"brand": "#0af"}},
        presets=[create_theme_preset(options)],
        rules=[Rule(re.compile(r"^text-(.+)$"), text_color)],
    )
    result = await generator.generate(["text-brand", "dark:text-brand"])
    print(result.css)
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Literal

from .host import (
    DEFAULT_LAYER,
    CSSBlock,
    GenerateResult,
    HostConfig,
    Preset,
    PreflightContext,
    Rule,
    RuleContext,
    Utility,
    Variant,
    VariantMatch,
    serialize_blocks,
)

logger = logging.getLogger(__name__)

DarkMode = Literal["class", "media"]

DEFAULT_CACHE_SIZE = 4096

_BASE_LAYERS: dict[str, int] = {"preflights": -100, DEFAULT_LAYER: 0}
_SCHEME_VARIANT_RE = re.compile(r"^(dark|light):(.+)$")
_ESCAPE_RE = re.compile(r"([^\w-])")


def escape_selector(token: str) -> str:
    """Escape a token for use as a class name."""
    return _ESCAPE_RE.sub(r"\\\1", token)


def color_scheme_variant(mode: DarkMode = "class") -> Variant:
    """
    ``dark:`` / ``light:`` prefixes.

    In class mode the utility is scoped under ``.dark`` / ``.light``; in media
    mode it is wrapped in a ``prefers-color-scheme`` query.
    """

    def match(matcher: str) -> VariantMatch | None:
        found = _SCHEME_VARIANT_RE.match(matcher)
        if not found:
            return None
        scheme, rest = found.groups()
        if mode == "media":
            return VariantMatch(matcher=rest, parent=f"@media (prefers-color-scheme: {scheme})")
        return VariantMatch(matcher=rest, selector=lambda selector: f".{scheme} {selector}")

    return Variant(name="color-scheme", match=match)


class UtilityGenerator:
    """Generates utility CSS for tokens using the configured presets."""

    def __init__(
        self,
        theme: dict[str, Any] | None = None,
        presets: Sequence[Preset] = (),
        rules: Sequence[Rule] = (),
        variants: Sequence[Variant] = (),
        layers: dict[str, int] | None = None,
        dark_mode: DarkMode = "class",
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self.config = self._resolve_config(theme or {}, presets, rules, variants, layers, dark_mode)
        self.cache_size = cache_size
        # Least recently used first
        self._cache: dict[str, Utility | None] = {}

    @staticmethod
    def _resolve_config(
        theme: dict[str, Any],
        presets: Sequence[Preset],
        rules: Sequence[Rule],
        variants: Sequence[Variant],
        layers: dict[str, int] | None,
        dark_mode: DarkMode,
    ) -> HostConfig:
        config = HostConfig(theme=copy.deepcopy(theme), layers=dict(_BASE_LAYERS))
        for preset in presets:
            config.theme = preset.extend_theme(config.theme)
            config.rules.extend(preset.rules)
            config.variants.extend(preset.variants)
            config.layers.update(preset.layers)
            config.preflights.extend(preset.preflights)
            config.postprocess.append(preset.postprocess)
            logger.debug("Loaded preset %s", preset.name)
        config.rules.extend(rules)
        config.variants.extend(variants)
        config.variants.append(color_scheme_variant(dark_mode))
        config.layers.update(layers or {})
        return config

    @property
    def theme(self) -> dict[str, Any]:
        return self.config.theme

    def _match_variants(self, token: str) -> tuple[str, list[VariantMatch]]:
        matcher = token
        applied: list[VariantMatch] = []
        used: set[str] = set()
        while True:
            for variant in self.config.variants:
                if variant.name in used:
                    continue
                result = variant.match(matcher)
                if result is not None:
                    used.add(variant.name)
                    applied.append(result)
                    matcher = result.matcher
                    break
            else:
                return matcher, applied

    def _parse_token(self, token: str) -> Utility | None:
        if token in self._cache:
            cached = self._cache[token] = self._cache.pop(token)
            return cached

        matcher, applied = self._match_variants(token)
        context = RuleContext(theme=self.config.theme, generator=self)
        utility: Utility | None = None

        for rule in self.config.rules:
            found = rule.pattern.match(matcher)
            if not found:
                continue
            result = rule.handler(found, context)
            if not result:
                continue
            pairs = result.items() if isinstance(result, Mapping) else result
            selector = "." + escape_selector(token)
            parent: str | None = None
            # Innermost variant rewrites first
            for variant_match in reversed(applied):
                if variant_match.selector is not None:
                    selector = variant_match.selector(selector)
                if parent is None and variant_match.parent is not None:
                    parent = variant_match.parent
            utility = Utility(
                token=token,
                selector=selector,
                entries=[[str(prop), str(value)] for prop, value in pairs],
                parent=parent,
                layer=rule.layer or DEFAULT_LAYER,
            )
            break

        if utility is None:
            logger.debug("No rule matched token %r", token)
        self._cache[token] = utility
        if len(self._cache) > self.cache_size:
            del self._cache[next(iter(self._cache))]
        return utility

    def _layer_order(self, layer: str) -> tuple[int, str]:
        return self.config.layers.get(layer, 0), layer

    async def generate(self, tokens: Iterable[str], *, preflights: bool = True) -> GenerateResult:
        """
        Generate CSS for ``tokens``.

        Utilities are matched and postprocessed first, so preflights see the
        hooks' side effects of this pass.

        Args:
            tokens: Utility tokens, duplicates ignored
            preflights: Whether to render preset preflights

        Returns:
            GenerateResult with the layered CSS text and the utility blocks
        """
        blocks: list[CSSBlock] = []
        for token in dict.fromkeys(tokens):
            parsed = self._parse_token(token)
            if parsed is None:
                continue
            utility = parsed.copy()
            for hook in self.config.postprocess:
                hook(utility)
            blocks.append(CSSBlock.from_utility(utility))

        layer_css: dict[str, list[str]] = {}
        if preflights:
            context = PreflightContext(generator=self, theme=self.config.theme)
            for preflight in self.config.preflights:
                css = await preflight.get_css(context)
                if css:
                    layer_css.setdefault(preflight.layer, []).append(css)

        for layer in dict.fromkeys(block.layer for block in blocks):
            rendered = serialize_blocks(block for block in blocks if block.layer == layer)
            layer_css.setdefault(layer, []).append(rendered)

        sections = [
            "\n".join([f"/* layer: {layer} */", *layer_css[layer]])
            for layer in sorted(layer_css, key=self._layer_order)
        ]
        return GenerateResult(css="\n".join(sections), blocks=tuple(blocks))
