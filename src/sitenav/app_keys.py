"""Application keys for type-safe app configuration access."""

from aiohttp import web

from sitenav.config import NavigationConfig
from sitenav.core.navigation import NavigationDefinition

navigation_config_key = web.AppKey("navigation_config", NavigationConfig)
definition_key = web.AppKey("definition", NavigationDefinition)
