"""
Error types for theme-preset configuration and generation.
"""


class ThemePresetError(Exception):
    """Base exception for all theme-preset errors."""

    pass


class ThemeConfigError(ThemePresetError):
    """
    Raised when theme configuration cannot be loaded or validated.

    Examples:
    - Unreadable or malformed themes.yaml
    - Theme leaves that are neither strings, numbers nor string lists
    - Unknown option keys
    """

    pass
