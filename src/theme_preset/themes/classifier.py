"""
Leaf value classification.

Only leaves under the ``colors`` category can be colors or background
images; everything else is a plain value.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from theme_preset.specs.theme import ParsedColor, ValueKind
from theme_preset.utils.colors import parse_css_color

COLOR_CATEGORY = "colors"

BACKGROUND_URL_RE = re.compile(r"^url\(.+\)$")


@dataclass(frozen=True)
class Classification:
    kind: ValueKind
    color: ParsedColor | None = None


def classify_value(value: str, key_path: Sequence[str]) -> Classification:
    """
    Decide how a theme leaf is turned into a variable.

    Args:
        value: Leaf value
        key_path: Path of the leaf inside the theme

    Returns:
        Classification with the parsed color for COLOR leaves
    """
    if key_path and key_path[0] == COLOR_CATEGORY:
        color = parse_css_color(value)
        if color is not None:
            return Classification(ValueKind.COLOR, color)
        if BACKGROUND_URL_RE.match(value):
            return Classification(ValueKind.BACKGROUND_IMAGE)
    return Classification(ValueKind.PLAIN)
