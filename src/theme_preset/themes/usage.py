"""
Usage tracking.

Watches generated utilities for references to theme variables and records
the matching bindings, so only variables that are actually used end up in
the theme layer.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Set

from theme_preset.runtime.host import Utility
from theme_preset.specs.theme import VariableBinding

from .registry import BindingRegistry

logger = logging.getLogger(__name__)

BACKGROUND_IMAGE_PROPERTY = "background-image"


class UsageTracker:
    """
    Append-only record of referenced bindings for one generation pass.

    Duplicates are kept; folding for a theme lets later entries win.
    """

    def __init__(
        self,
        registry: BindingRegistry,
        prefix: str,
        background_images: Set[str] = frozenset(),
    ) -> None:
        self.registry = registry
        self.background_images = background_images
        self.vars_re = re.compile(rf"var\(({re.escape(prefix)}[\w-]*)\)")
        self.records: list[VariableBinding] = []

    def observe(self, utility: Utility) -> None:
        """Record bindings referenced by ``utility`` and fix background images."""
        for entry in utility.entries:
            value = entry[1]
            if not isinstance(value, str):
                continue
            for name in self.vars_re.findall(value):
                binding = self.registry.get(name)
                if binding is not None:
                    self.records.append(binding)
            if value in self.background_images:
                entry[0] = BACKGROUND_IMAGE_PROPERTY

    def declarations(self, theme_name: str) -> dict[str, str]:
        """Fold the record into ``{variable: value}`` for one theme."""
        folded: dict[str, str] = {}
        for binding in self.records:
            folded.update(binding.for_theme(theme_name))
        return folded

    def used_names(self) -> list[str]:
        """Distinct variable names in first-seen order."""
        return list(dict.fromkeys(binding.name for binding in self.records))

    def snapshot(self) -> list[VariableBinding]:
        return list(self.records)

    def clear(self) -> None:
        logger.debug("Clearing %d usage records", len(self.records))
        self.records.clear()
