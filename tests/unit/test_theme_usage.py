"""Tests for usage tracking and selector resolution."""

from __future__ import annotations

import pytest

from theme_preset.runtime.host import Utility
from theme_preset.specs.theme import VariableBinding
from theme_preset.themes import BindingRegistry, SelectorResolver, UsageTracker

PREFIX = "--t"


@pytest.fixture
def registry() -> BindingRegistry:
    registry = BindingRegistry()
    registry.register(
        VariableBinding(name="--t-colors-primary", values={"light": "255, 0, 0", "dark": "0, 255, 0"})
    )
    registry.register(VariableBinding(name="--t-colors-hero", values={"light": "url(/a.png)"}))
    registry.register(VariableBinding(name="--t-spacing-md", values={"light": "1rem"}))
    return registry


@pytest.fixture
def tracker(registry: BindingRegistry) -> UsageTracker:
    return UsageTracker(registry, PREFIX, frozenset({"var(--t-colors-hero)"}))


def _utility(*entries: tuple[str, str]) -> Utility:
    return Utility(token="x", selector=".x", entries=[list(entry) for entry in entries])


# =============================================================================
# UsageTracker
# =============================================================================


class TestUsageTracker:
    def test_records_referenced_binding(self, tracker: UsageTracker) -> None:
        tracker.observe(_utility(("color", "rgb(var(--t-colors-primary), 1)")))
        assert tracker.used_names() == ["--t-colors-primary"]
        assert tracker.declarations("light") == {"--t-colors-primary": "255, 0, 0"}
        assert tracker.declarations("dark") == {"--t-colors-primary": "0, 255, 0"}

    def test_ignores_unknown_references(self, tracker: UsageTracker) -> None:
        tracker.observe(_utility(("color", "var(--t-colors-missing)"), ("margin", "var(--other)")))
        assert tracker.records == []
        assert tracker.declarations("light") == {}

    def test_multiple_references_in_one_value(self, tracker: UsageTracker) -> None:
        tracker.observe(_utility(("padding", "var(--t-spacing-md) var(--t-colors-primary)")))
        assert tracker.used_names() == ["--t-spacing-md", "--t-colors-primary"]

    def test_rewrites_background_image_property(self, tracker: UsageTracker) -> None:
        utility = _utility(("background-color", "var(--t-colors-hero)"))
        tracker.observe(utility)
        assert utility.entries == [["background-image", "var(--t-colors-hero)"]]

    def test_background_rewrite_targets_matching_entry(self, tracker: UsageTracker) -> None:
        utility = _utility(("color", "red"), ("background-color", "var(--t-colors-hero)"))
        tracker.observe(utility)
        assert utility.entries == [
            ["color", "red"],
            ["background-image", "var(--t-colors-hero)"],
        ]

    def test_other_entries_untouched(self, tracker: UsageTracker) -> None:
        utility = _utility(("color", "rgb(var(--t-colors-primary), 1)"))
        tracker.observe(utility)
        assert utility.entries == [["color", "rgb(var(--t-colors-primary), 1)"]]

    def test_duplicates_fold_to_one_declaration(self, tracker: UsageTracker) -> None:
        tracker.observe(_utility(("color", "rgb(var(--t-colors-primary), 1)")))
        tracker.observe(_utility(("border-color", "rgb(var(--t-colors-primary), 1)")))
        assert len(tracker.records) == 2
        assert tracker.used_names() == ["--t-colors-primary"]
        assert tracker.declarations("light") == {"--t-colors-primary": "255, 0, 0"}

    def test_theme_without_value_is_omitted(self, tracker: UsageTracker) -> None:
        tracker.observe(_utility(("margin", "var(--t-spacing-md)")))
        assert tracker.declarations("dark") == {}

    def test_later_records_win(self) -> None:
        registry = BindingRegistry()
        tracker = UsageTracker(registry, PREFIX)
        tracker.records.append(VariableBinding(name="--t-a", values={"light": "1"}))
        tracker.records.append(VariableBinding(name="--t-a", values={"light": "2"}))
        assert tracker.declarations("light") == {"--t-a": "2"}

    def test_clear(self, tracker: UsageTracker) -> None:
        tracker.observe(_utility(("color", "rgb(var(--t-colors-primary), 1)")))
        snapshot = tracker.snapshot()
        tracker.clear()
        assert tracker.records == []
        assert len(snapshot) == 1

    def test_prefix_is_escaped(self, registry: BindingRegistry) -> None:
        registry.register(VariableBinding(name="--t.x-a", values={"light": "1"}))
        tracker = UsageTracker(registry, "--t.x")
        tracker.observe(_utility(("margin", "var(--tax-a) var(--t.x-a)")))
        assert tracker.used_names() == ["--t.x-a"]


# =============================================================================
# SelectorResolver
# =============================================================================


class TestSelectorResolver:
    def test_defaults(self) -> None:
        resolver = SelectorResolver()
        assert resolver.resolve("light") == ":root"
        assert resolver.resolve("dark") == ".dark"
        assert resolver.resolve("ocean") == ".ocean"

    def test_overrides_win(self) -> None:
        resolver = SelectorResolver({"dark": '[data-theme="dark"]', "light": "html"})
        assert resolver.resolve("dark") == '[data-theme="dark"]'
        assert resolver.resolve("light") == "html"
        assert resolver.resolve("ocean") == ".ocean"
