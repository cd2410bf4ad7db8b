"""
Pure-Python CSS color parsing.

Recognises the color syntaxes a theme is likely to contain and splits them
into a function type, channel components and an optional alpha. No external
color libraries required.
"""

from __future__ import annotations

import re
from typing import Literal

from theme_preset.specs.theme import ParsedColor, format_component

CSS_COLOR_FUNCTIONS: tuple[str, ...] = (
    "hsl",
    "hsla",
    "hwb",
    "lab",
    "lch",
    "oklab",
    "oklch",
    "rgb",
    "rgba",
)

# Keywords that are not plain names in every engine; mapped to rgba.
_COLOR_KEYWORDS: dict[str, tuple[int, int, int, int]] = {
    "rebeccapurple": (102, 51, 153, 1),
}

_HEX_RE = re.compile(r"^#([\da-f]+)$", re.IGNORECASE)
_COMMA_FUNCTION_RE = re.compile(r"^(rgb|rgba|hsl|hsla)\((.+)\)$", re.IGNORECASE)
_SPACE_FUNCTION_RE = re.compile(rf"^({'|'.join(CSS_COLOR_FUNCTIONS)})\((.+)\)$", re.IGNORECASE)
_COLOR_FUNCTION_RE = re.compile(r"^color\((.+)\)$")

# Components parsed from text, before validation
_Parsed = tuple[str, list[str | int | float], str | int | float | None]


def wrap_var(name: str) -> str:
    """Wrap a custom property name in var()."""
    return f"var({name})"


def wrap_css_function(function: str, variable: str, alpha: str | int | float | None = None) -> str:
    """
    Build a color function call around a variable holding joined channels.

    Args:
        function: Color function name, e.g. "rgb"
        variable: var() reference whose value is "r, g, b"
        alpha: Alpha channel, defaults to 1

    Returns:
        CSS string such as "rgb(var(--x), 1)"
    """
    return f"{function}({variable}, {format_component(1 if alpha is None else alpha)})"


def split_components(value: str, separator: str, limit: int | None = None) -> list[str] | None:
    """
    Split on a separator outside of parentheses.

    Returns None for empty input or when there are more than ``limit`` parts.
    """
    value = value.strip()
    if not value:
        return None

    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())

    if separator == " ":
        parts = [part for part in parts if part]
    if limit is not None and len(parts) > limit:
        return None
    return parts


def _parse_hex(value: str) -> _Parsed | None:
    match = _HEX_RE.match(value)
    if not match:
        return None
    body = match.group(1)

    if len(body) in (3, 4):
        digits = [int(char * 2, 16) for char in body]
        alpha = round(digits[3] / 255 * 100) / 100 if len(body) == 4 else None
        return "rgb", list(digits[:3]), alpha

    if len(body) in (6, 8):
        channels = [int(body[i : i + 2], 16) for i in range(0, len(body), 2)]
        alpha = round(channels[3] / 255 * 100) / 100 if len(body) == 8 else None
        return "rgb", list(channels[:3]), alpha

    return None


def _parse_keyword(value: str) -> _Parsed | None:
    rgba = _COLOR_KEYWORDS.get(value)
    if rgba is None:
        return None
    return "rgb", list(rgba[:3]), rgba[3]


def _parse_comma_function(value: str) -> _Parsed | Literal[False] | None:
    """Legacy comma syntax. Returns False to reject the value outright."""
    match = _COMMA_FUNCTION_RE.match(value)
    if not match:
        return None
    function, body = match.groups()
    components = split_components(body, ",", 5)
    if components is None or len(components) == 1:
        return None
    if len(components) in (3, 4):
        alpha = components[3] if len(components) == 4 else None
        return function, list(components[:3]), alpha
    return False


def _parse_space_values(body: str) -> tuple[list[str], str | None] | None:
    components = split_components(body, " ")
    if not components:
        return None

    # (fn 1 2 3 / 4)
    if len(components) >= 2 and components[-2] == "/":
        return components[:-2], components[-1]

    # (fn 1 2 3/ 4) or (fn 1 2 3 /4)
    if len(components) >= 2 and (components[-2].endswith("/") or components[-1].startswith("/")):
        components = components[:-2] + [" ".join(components[-2:])]

    # (fn 1 2 3/4) or (fn 1 2 3)
    with_alpha = split_components(components[-1], "/", 2)
    if not with_alpha:
        return None
    if len(with_alpha) == 1 or with_alpha[-1] == "":
        return components, None
    components[-1] = with_alpha[0]
    return components, with_alpha[1]


def _parse_space_function(value: str) -> _Parsed | None:
    match = _SPACE_FUNCTION_RE.match(value)
    if not match:
        return None
    function, body = match.groups()
    parsed = _parse_space_values(f"{function} {body}")
    if parsed is None:
        return None
    (function_type, *components), alpha = parsed
    return function_type, list(components), alpha


def _parse_color_function(value: str) -> _Parsed | None:
    match = _COLOR_FUNCTION_RE.match(value)
    if not match:
        return None
    parsed = _parse_space_values(match.group(1))
    if parsed is None:
        return None
    (color_space, *components), alpha = parsed
    return color_space, list(components), alpha


def parse_css_color(value: str | None) -> ParsedColor | None:
    """
    Parse a CSS color string.

    Supports hex (#rgb, #rgba, #rrggbb, #rrggbbaa), rebeccapurple,
    comma syntax rgb()/hsl(), space syntax with an optional "/ alpha"
    and color(<space> ...).

    Args:
        value: Candidate color string

    Returns:
        ParsedColor, or None if the string is not a usable color
    """
    if not value:
        return None

    parsed: _Parsed | Literal[False] | None = None
    for parser in (
        _parse_hex,
        _parse_keyword,
        _parse_comma_function,
        _parse_space_function,
        _parse_color_function,
    ):
        parsed = parser(value)
        if parsed is not None:
            break

    if not parsed:
        return None

    function_type, components, alpha = parsed
    function_type = function_type.lower()

    if not components:
        return None
    if function_type in ("rgba", "hsla") and alpha is None:
        return None
    if function_type in CSS_COLOR_FUNCTIONS and len(components) not in (1, 3):
        return None

    return ParsedColor(
        type=function_type,
        components=[c.strip() if isinstance(c, str) else c for c in components],
        alpha=alpha.strip() if isinstance(alpha, str) else alpha,
    )
