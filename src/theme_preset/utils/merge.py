"""
Deep merge for nested theme mappings.
"""

from __future__ import annotations

import copy
from typing import Any


def merge_deep(original: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``patch`` into a copy of ``original``.

    Nested mappings are merged recursively. When one side holds a mapping and
    the other a value (string, number or list), the value wins. Otherwise the
    patch wins. Neither input is modified.

    Args:
        original: Base mapping
        patch: Mapping whose entries take precedence

    Returns:
        New merged mapping
    """
    output = copy.deepcopy(original)
    for key, value in patch.items():
        current = output.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            output[key] = merge_deep(current, value)
        elif isinstance(value, dict) and current is not None:
            # Existing value leaf beats an incoming mapping
            continue
        else:
            output[key] = copy.deepcopy(value)
    return output


def merge_all(trees: list[dict[str, Any]]) -> dict[str, Any]:
    """Fold ``merge_deep`` over trees, later trees taking precedence."""
    merged: dict[str, Any] = {}
    for tree in trees:
        merged = merge_deep(merged, tree)
    return merged
