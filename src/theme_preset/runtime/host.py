"""
Host pipeline interface.

Types shared between a utility CSS generator and the presets plugged into
it: rules, variants, preflights, layers and the postprocess hook. The
``Generator`` protocol is all a preset needs from its host.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

DEFAULT_LAYER = "default"


# =============================================================================
# Utilities and output
# =============================================================================


@dataclass
class Utility:
    """
    One generated utility, handed to postprocess hooks.

    ``entries`` are mutable ``[property, value]`` pairs so hooks can rewrite
    either side.
    """

    token: str
    selector: str
    entries: list[list[str]]
    parent: str | None = None
    layer: str = DEFAULT_LAYER

    def copy(self) -> Utility:
        return Utility(
            token=self.token,
            selector=self.selector,
            entries=[list(entry) for entry in self.entries],
            parent=self.parent,
            layer=self.layer,
        )


@dataclass(frozen=True)
class CSSBlock:
    """A selector with its declarations, optionally nested in an at-rule."""

    selector: str
    entries: tuple[tuple[str, str], ...]
    parent: str | None = None
    layer: str = DEFAULT_LAYER

    @classmethod
    def from_utility(cls, utility: Utility) -> CSSBlock:
        return cls(
            selector=utility.selector,
            entries=tuple((prop, value) for prop, value in utility.entries),
            parent=utility.parent,
            layer=utility.layer,
        )

    def render(self) -> str:
        body = "".join(f"{prop}:{value};" for prop, value in self.entries)
        return f"{self.selector}{{{body}}}"


@dataclass(frozen=True)
class GenerateResult:
    css: str
    blocks: tuple[CSSBlock, ...] = ()


def serialize_blocks(blocks: Iterable[CSSBlock]) -> str:
    """
    Render blocks one per line, grouping consecutive blocks that share a
    parent at-rule.

    Example output::

        :root{--a:1;}
        @media (prefers-color-scheme: dark){
        :root{--a:2;}
        }
    """
    lines: list[str] = []
    open_parent: str | None = None
    for block in blocks:
        if block.parent != open_parent:
            if open_parent is not None:
                lines.append("}")
            if block.parent is not None:
                lines.append(f"{block.parent}{{")
            open_parent = block.parent
        lines.append(block.render())
    if open_parent is not None:
        lines.append("}")
    return "\n".join(lines)


# =============================================================================
# Registration surface
# =============================================================================


class Generator(Protocol):
    """What a preset may call on its host."""

    theme: dict[str, Any]

    async def generate(
        self, tokens: Iterable[str], *, preflights: bool = True
    ) -> GenerateResult: ...


@dataclass(frozen=True)
class RuleContext:
    theme: Mapping[str, Any]
    generator: Generator


RuleResult = Mapping[str, str] | Sequence[tuple[str, str]] | None


@dataclass(frozen=True)
class Rule:
    pattern: re.Pattern[str]
    handler: Callable[[re.Match[str], RuleContext], RuleResult]
    layer: str | None = None


@dataclass(frozen=True)
class VariantMatch:
    """
    Result of a variant match.

    Attributes:
        matcher: Remaining token for further variants and rules
        selector: Rewrites the utility selector
        parent: At-rule wrapping the utility, e.g. "@media (...)"
    """

    matcher: str
    selector: Callable[[str], str] | None = None
    parent: str | None = None


@dataclass(frozen=True)
class Variant:
    name: str
    match: Callable[[str], VariantMatch | None]


@dataclass(frozen=True)
class PreflightContext:
    generator: Generator
    theme: Mapping[str, Any]


@dataclass(frozen=True)
class Preflight:
    get_css: Callable[[PreflightContext], Awaitable[str | None]]
    layer: str = "preflights"


class Preset(Protocol):
    """A bundle of rules, variants, layers, preflights and hooks."""

    name: str
    rules: list[Rule]
    variants: list[Variant]
    layers: dict[str, int]
    preflights: list[Preflight]

    def extend_theme(self, theme: dict[str, Any]) -> dict[str, Any]: ...

    def postprocess(self, utility: Utility) -> None: ...


@dataclass
class HostConfig:
    """Resolved generator configuration after presets are applied."""

    theme: dict[str, Any] = field(default_factory=dict)
    rules: list[Rule] = field(default_factory=list)
    variants: list[Variant] = field(default_factory=list)
    layers: dict[str, int] = field(default_factory=dict)
    preflights: list[Preflight] = field(default_factory=list)
    postprocess: list[Callable[[Utility], None]] = field(default_factory=list)
