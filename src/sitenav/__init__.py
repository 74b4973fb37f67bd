"""Sitenav - hierarchical site navigation with request-aware highlighting.

Build a tree of navigation items once per request and ask each item
whether it is selected::

    from sitenav import NavigationConfig, PathRequestContext, build_navigation

    def main_menu(nav):
        nav.item("home", "Home", "/")
        nav.item("docs", "Docs", "/docs", {"highlights_on": "subpath"})

    root = build_navigation(main_menu, NavigationConfig(), PathRequestContext("/docs/intro"))
    root["docs"].selected()  # True
"""

from sitenav.config import Config, NavigationConfig
from sitenav.core import (
    HighlightKind,
    HighlightRule,
    Item,
    ItemContainer,
    PathRequestContext,
    RequestContext,
    build_navigation,
)
from sitenav.errors import DefinitionError, InvalidHighlightRule, NavigationError

__version__ = "0.1.0"
__all__ = [
    "Config",
    "DefinitionError",
    "HighlightKind",
    "HighlightRule",
    "InvalidHighlightRule",
    "Item",
    "ItemContainer",
    "NavigationConfig",
    "NavigationError",
    "PathRequestContext",
    "RequestContext",
    "__version__",
    "build_navigation",
]
