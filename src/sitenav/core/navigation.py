"""Navigation tree builder.

Builds a fresh navigation tree for one request from a definition callable.
The definition receives the root container and declares items on it::

    def main_menu(nav: ItemContainer) -> None:
        nav.item("home", "Home", "/")
        nav.item("docs", "Docs", "/docs", builder=lambda sub: (
            sub.item("intro", "Introduction", "/docs/intro"),
            sub.item("api", "API", "/docs/api", {"highlights_on": "subpath"}),
        ))
"""

import logging
from collections.abc import Callable
from typing import TypeAlias, TypedDict

from sitenav.config import NavigationConfig
from sitenav.core.container import ItemContainer
from sitenav.core.item import ItemDict
from sitenav.core.request import RequestContext
from sitenav.errors import DefinitionError
from sitenav.loader import load_callable

logger = logging.getLogger(__name__)

NavigationDefinition: TypeAlias = Callable[[ItemContainer], object]


class NavigationTreeDict(TypedDict):
    """Dictionary representation of a resolved navigation tree."""

    items: list[ItemDict]
    active_level: int


def build_navigation(
    definition: NavigationDefinition,
    config: NavigationConfig,
    request: RequestContext,
) -> ItemContainer:
    """Build a navigation tree for a single request.

    Args:
        definition: Callable declaring items on the root container
        config: Navigation configuration
        request: Context of the request being rendered

    Returns:
        Populated root container
    """
    root = ItemContainer(config, request)
    definition(root)
    logger.debug(f"Built navigation with {len(root)} root items for {request.request_uri}")
    return root


def resolve_definition(config: NavigationConfig) -> NavigationDefinition:
    """Import the definition configured in ``navigation.definition``.

    Raises:
        DefinitionError: If no definition is configured or it cannot be loaded
    """
    if not config.definition:
        raise DefinitionError(
            "No navigation definition configured (set navigation.definition)",
        )
    return load_callable(config.definition)


def navigation_to_dict(root: ItemContainer) -> NavigationTreeDict:
    """Resolve selection for the whole tree and convert it for JSON output."""
    return {
        "items": root.to_list(),
        "active_level": root.active_leaf_container().level,
    }
