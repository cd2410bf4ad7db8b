"""Variable name allocation."""

from __future__ import annotations

from collections.abc import Sequence


def allocate_name(prefix: str, key_path: Sequence[str], index: int | None = None) -> str:
    """
    Derive the CSS variable name for a theme leaf.

    >>> allocate_name("--un-preset-theme", ["colors", "primary"])
    '--un-preset-theme-colors-primary'
    >>> allocate_name("--t", ["fontFamily", "sans"], 1)
    '--t-fontFamily-sans-1'
    """
    parts = [prefix, *key_path]
    if index is not None:
        parts.append(str(index))
    return "-".join(parts)
