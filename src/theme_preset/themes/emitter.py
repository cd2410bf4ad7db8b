"""
Theme layer emission.

Asks the host to generate one synthetic utility per theme, then turns the
resulting blocks into plain selector-scoped variable declarations.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence

from theme_preset.runtime.host import CSSBlock, Generator, serialize_blocks
from theme_preset.specs.theme import DEFAULT_THEME

from .selectors import ROOT_SELECTOR

logger = logging.getLogger(__name__)

PRESET_THEME_RULE = "PRESET_THEME_RULE"
THEME_LAYER = "theme"

# Theme names the host already knows as scoping variants (dark:, light:)
SCOPED_THEME_NAMES: tuple[str, ...] = ("dark", "light")

# Shared across emitters so synthetic tokens never collide in a host cache
_nonce = itertools.count()


def theme_token(theme_name: str, nonce: int) -> str:
    """
    Synthetic utility for one theme.

    >>> theme_token("dark", 7)
    'dark:PRESET_THEME_RULE:dark:7'
    >>> theme_token("ocean", 7)
    'PRESET_THEME_RULE:ocean:7'
    """
    token = f"{PRESET_THEME_RULE}:{theme_name}:{nonce}"
    if theme_name in SCOPED_THEME_NAMES:
        return f"{theme_name}:{token}"
    return token


def _split_first_compound(selector: str) -> tuple[str, str]:
    """Split at the first descendant combinator outside brackets and quotes."""
    depth = 0
    quote: str | None = None
    for position, char in enumerate(selector):
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        elif char.isspace() and depth == 0:
            return selector[:position], selector[position:].strip()
    return selector, ""


def reshape_block(block: CSSBlock) -> CSSBlock:
    """
    Reduce a host block to the selector that should carry the variables.

    Blocks inside a media query bind to ``:root``. A leading class scope
    added by the host (``.dark .x``) is dropped.
    """
    if block.parent is not None and block.parent.startswith("@media"):
        selector = ROOT_SELECTOR
    else:
        first, rest = _split_first_compound(block.selector)
        selector = rest if first.startswith(".") and rest else block.selector
    return CSSBlock(selector=selector, entries=block.entries, parent=block.parent, layer=THEME_LAYER)


def render_theme_css(blocks: Iterable[CSSBlock]) -> str:
    return serialize_blocks(reshape_block(block) for block in blocks)


class ThemeCSSEmitter:
    """
    Produces the content of the theme layer.

    The default theme is emitted first. Its ``:root`` block has the same
    specificity as ``.dark``, so any scoped theme must come after it.
    """

    def __init__(self, theme_names: Sequence[str]) -> None:
        self.theme_names = sorted(theme_names, key=lambda name: name != DEFAULT_THEME)

    def tokens(self) -> list[str]:
        nonce = next(_nonce)
        return [theme_token(name, nonce) for name in self.theme_names]

    async def emit(self, generator: Generator) -> str:
        """
        Generate the theme layer through ``generator``.

        Preflights are disabled on the inner call, since this runs as one.
        """
        result = await generator.generate(self.tokens(), preflights=False)
        logger.debug("Emitting %d theme block(s)", len(result.blocks))
        return render_theme_css(result.blocks)
