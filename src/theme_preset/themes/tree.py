"""
Typed theme tree.

A theme is converted once into immutable nodes so the flattener can walk it
with pattern matching and build a new tree instead of editing dicts in place.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ScalarNode:
    value: str


@dataclass(frozen=True)
class SequenceNode:
    items: tuple[str, ...]


@dataclass(frozen=True)
class MappingNode:
    children: tuple[tuple[str, ThemeNode], ...]

    def get(self, key: str) -> ThemeNode | None:
        for child_key, child in self.children:
            if child_key == key:
                return child
        return None


ThemeNode = ScalarNode | SequenceNode | MappingNode


def build_tree(data: Any) -> ThemeNode:
    """Convert plain theme data (dicts, lists, strings, numbers) into nodes."""
    match data:
        case dict():
            return MappingNode(tuple((str(key), build_tree(value)) for key, value in data.items()))
        case list() | tuple():
            return SequenceNode(tuple(str(item) for item in data))
        case bool():
            raise TypeError(f"Unsupported theme value: {data!r}")
        case str() | int() | float():
            return ScalarNode(str(data))
        case _:
            raise TypeError(f"Unsupported theme value: {data!r}")


def to_data(node: ThemeNode) -> Any:
    """Convert nodes back into plain dicts, lists and strings."""
    match node:
        case MappingNode(children=children):
            return {key: to_data(child) for key, child in children}
        case SequenceNode(items=items):
            return list(items)
        case ScalarNode(value=value):
            return value


def lookup(node: ThemeNode | None, path: Sequence[str], index: int | None = None) -> str | None:
    """
    Resolve the scalar stored at ``path`` (and ``index`` for sequences).

    Returns None when the path is missing, ends on a mapping, or resolves to
    an empty string.
    """
    for key in path:
        if not isinstance(node, MappingNode):
            return None
        node = node.get(key)

    match node:
        case ScalarNode(value=value):
            return value or None
        case SequenceNode(items=items):
            position = index or 0
            if position < len(items):
                return items[position] or None
            return None
        case _:
            return None
