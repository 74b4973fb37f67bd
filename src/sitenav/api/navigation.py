"""Navigation API endpoint.

Resolves the navigation tree for a page path and returns it as JSON with
selection state and HTML attributes for every item.
"""

import logging

from aiohttp import web

from sitenav.app_keys import definition_key, navigation_config_key
from sitenav.core.navigation import build_navigation, navigation_to_dict
from sitenav.core.request import PathRequestContext
from sitenav.errors import NavigationError

logger = logging.getLogger(__name__)


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    path = request.query.get("path", "/")
    if not path.startswith("/"):
        path = f"/{path}"

    context = PathRequestContext.from_uri(path, host=request.host)
    config = request.app[navigation_config_key]
    definition = request.app[definition_key]

    try:
        root = build_navigation(definition, config, context)
        tree = navigation_to_dict(root)
    except NavigationError as e:
        logger.error(f"Invalid navigation definition: {e}")
        return web.json_response(
            {"error": "Invalid navigation definition", "detail": str(e)},
            status=500,
        )

    return web.json_response(tree)
