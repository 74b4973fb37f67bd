"""Sitenav error hierarchy.

All sitenav-specific errors inherit from NavigationError for easy catching.
"""


class NavigationError(Exception):
    """Base error for all sitenav operations."""


class InvalidHighlightRule(NavigationError, ValueError):
    """An item's highlights_on option is not a regex, callable or subpath marker."""


class DefinitionError(NavigationError):
    """A navigation definition or generator could not be loaded."""
