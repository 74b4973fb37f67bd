"""aiohttp server for Sitenav.

Application factory and route registration for standalone server mode.
"""

import logging

from aiohttp import web

from sitenav.api.navigation import create_navigation_routes
from sitenav.app_keys import definition_key, navigation_config_key
from sitenav.config import Config
from sitenav.core.navigation import NavigationDefinition, resolve_definition

logger = logging.getLogger(__name__)


def create_app(
    config: Config,
    *,
    definition: NavigationDefinition | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        definition: Navigation definition; loaded from
            ``navigation.definition`` when omitted

    Returns:
        Configured aiohttp application

    Raises:
        DefinitionError: If no definition is given and none can be loaded
    """
    if definition is None:
        definition = resolve_definition(config.navigation)

    app = web.Application()
    app[navigation_config_key] = config.navigation
    app[definition_key] = definition

    app.router.add_routes(create_navigation_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving navigation on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
