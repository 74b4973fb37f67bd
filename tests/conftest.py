"""Shared test fixtures."""

from collections.abc import Callable
from typing import Any, TypeAlias

import pytest
from sitenav.config import NavigationConfig
from sitenav.core.container import ItemContainer
from sitenav.core.request import PathRequestContext

RootFactory: TypeAlias = Callable[..., ItemContainer]


@pytest.fixture
def nav_config() -> NavigationConfig:
    """Navigation configuration with defaults."""
    return NavigationConfig()


@pytest.fixture
def make_root() -> RootFactory:
    """Create root containers for a request URI.

    Keyword arguments other than ``host`` are passed to NavigationConfig,
    so tests can write ``make_root("/docs", highlight_on_subpath=True)``.
    """

    def factory(uri: str = "/", host: str | None = None, **config: Any) -> ItemContainer:
        return ItemContainer(
            NavigationConfig(**config),
            PathRequestContext.from_uri(uri, host=host),
        )

    return factory
