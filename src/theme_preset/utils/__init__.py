"""Shared helpers: CSS color parsing and deep merge."""

from .colors import parse_css_color, wrap_css_function, wrap_var
from .merge import merge_all, merge_deep

__all__ = [
    "merge_all",
    "merge_deep",
    "parse_css_color",
    "wrap_css_function",
    "wrap_var",
]
