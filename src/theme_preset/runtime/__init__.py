"""Host pipeline interface and the reference utility generator."""

from .generator import UtilityGenerator, color_scheme_variant, escape_selector
from .host import (
    CSSBlock,
    GenerateResult,
    Generator,
    Preflight,
    PreflightContext,
    Preset,
    Rule,
    RuleContext,
    Utility,
    Variant,
    VariantMatch,
    serialize_blocks,
)

__all__ = [
    "CSSBlock",
    "GenerateResult",
    "Generator",
    "Preflight",
    "PreflightContext",
    "Preset",
    "Rule",
    "RuleContext",
    "Utility",
    "UtilityGenerator",
    "Variant",
    "VariantMatch",
    "color_scheme_variant",
    "escape_selector",
    "serialize_blocks",
]
