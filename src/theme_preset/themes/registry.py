"""Binding registry: variable name -> VariableBinding."""

from __future__ import annotations

from collections.abc import Iterator

from theme_preset.specs.theme import VariableBinding


class BindingRegistry:
    """Bindings created by the flattener, in registration order."""

    def __init__(self) -> None:
        self._bindings: dict[str, VariableBinding] = {}

    def register(self, binding: VariableBinding) -> None:
        self._bindings[binding.name] = binding

    def get(self, name: str) -> VariableBinding | None:
        return self._bindings.get(name)

    def names(self) -> list[str]:
        return list(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[VariableBinding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)
