"""Navigation tree and selection resolution."""

from .container import ItemContainer
from .highlight import HighlightKind, HighlightRule
from .item import Item
from .navigation import build_navigation
from .request import PathRequestContext, RequestContext

__all__ = [
    "HighlightKind",
    "HighlightRule",
    "Item",
    "ItemContainer",
    "PathRequestContext",
    "RequestContext",
    "build_navigation",
]
