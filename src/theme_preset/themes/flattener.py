"""
Theme flattening.

Merges every theme into one tree, then walks it depth-first. Each leaf gets a
variable name, a binding that records what every theme resolves it to, and is
replaced by a reference to that variable in the returned tree.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from theme_preset.specs.theme import DEFAULT_THEME, ValueKind, VariableBinding
from theme_preset.utils.colors import parse_css_color, wrap_css_function, wrap_var
from theme_preset.utils.merge import merge_all

from .classifier import classify_value
from .naming import allocate_name
from .registry import BindingRegistry
from .tree import MappingNode, ScalarNode, SequenceNode, ThemeNode, build_tree, lookup, to_data

logger = logging.getLogger(__name__)


@dataclass
class FlattenResult:
    """Rewritten theme tree plus everything needed to emit and track it."""

    tree: dict[str, Any]
    registry: BindingRegistry
    background_images: set[str] = field(default_factory=set)


class ThemeFlattener:
    """
    Turns a set of named themes into CSS variable bindings.

    Args:
        themes: Theme name -> nested theme mapping
        prefix: Prefix for every generated variable name
    """

    def __init__(self, themes: Mapping[str, Mapping[str, Any]], prefix: str) -> None:
        self.prefix = prefix
        self.theme_names = list(themes)
        self._merged = build_tree(merge_all([dict(tree) for tree in themes.values()]))
        self._trees: dict[str, ThemeNode] = {
            name: build_tree(dict(tree)) for name, tree in themes.items()
        }

    def flatten(self, base: Mapping[str, Any] | None = None) -> FlattenResult:
        """
        Flatten the merged themes.

        Args:
            base: Host theme, the fallback source for the default theme

        Returns:
            FlattenResult with a new tree; inputs are left untouched
        """
        base_tree = build_tree(dict(base or {}))
        registry = BindingRegistry()
        background_images: set[str] = set()

        rewritten = self._walk(self._merged, (), base_tree, registry, background_images)
        logger.debug(
            "Flattened %d theme(s) into %d variable(s)", len(self.theme_names), len(registry)
        )
        return FlattenResult(
            tree=to_data(rewritten),
            registry=registry,
            background_images=background_images,
        )

    def _walk(
        self,
        node: ThemeNode,
        path: tuple[str, ...],
        base: ThemeNode,
        registry: BindingRegistry,
        background_images: set[str],
    ) -> ThemeNode:
        match node:
            case MappingNode(children=children):
                return MappingNode(
                    tuple(
                        (key, self._walk(child, (*path, key), base, registry, background_images))
                        for key, child in children
                    )
                )
            case SequenceNode(items=items):
                return SequenceNode(
                    tuple(
                        self._bind(item, path, index, base, registry, background_images)
                        for index, item in enumerate(items)
                    )
                )
            case ScalarNode(value=value):
                return ScalarNode(self._bind(value, path, None, base, registry, background_images))
        raise TypeError(f"Unexpected theme node: {node!r}")

    def _bind(
        self,
        value: str,
        path: tuple[str, ...],
        index: int | None,
        base: ThemeNode,
        registry: BindingRegistry,
        background_images: set[str],
    ) -> str:
        name = allocate_name(self.prefix, path, index)
        classification = classify_value(value, path)
        is_color = classification.kind is ValueKind.COLOR
        registry.register(
            VariableBinding(name=name, values=self._resolve(path, index, base, is_color))
        )

        reference = wrap_var(name)
        if classification.color is not None:
            return wrap_css_function(classification.color.type, reference, classification.color.alpha)
        if classification.kind is ValueKind.BACKGROUND_IMAGE:
            background_images.add(reference)
        return reference

    def _resolve(
        self,
        path: tuple[str, ...],
        index: int | None,
        base: ThemeNode,
        is_color: bool,
    ) -> dict[str, str]:
        values: dict[str, str] = {}
        for theme_name in self.theme_names:
            value = lookup(self._trees[theme_name], path, index)
            if value is None and theme_name == DEFAULT_THEME:
                value = lookup(base, path, index)
            if value is None:
                continue
            if is_color:
                color = parse_css_color(value)
                if color is not None and color.components:
                    value = color.joined_components()
            values[theme_name] = value
        return values
