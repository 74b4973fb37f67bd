"""Configuration management for Sitenav.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from sitenav.loader import load_callable

CONFIG_FILENAME = "sitenav.toml"

DEFAULT_SELECTED_CLASS = "selected"
DEFAULT_ACTIVE_LEAF_CLASS = "active-leaf"


def default_id_generator(key: object) -> str:
    """Use the item key as its DOM id."""
    return str(key)


def default_name_generator(name: Any, item: object) -> Any:
    """Return the item name unchanged."""
    return name


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class NavigationConfig:
    """Navigation behaviour shared by every item of a tree.

    Attributes:
        definition: ``module:callable`` building the tree into a root container
        auto_highlight: Select items whose URL matches the current request
        highlight_on_subpath: Also select items whose URL is a prefix of the
            request URI
        selected_class: CSS class for selected items
        active_leaf_class: CSS class for the item selected directly
        autogenerate_item_ids: Add an id to items that have none
        id_generator: Builds an item id from its key
        name_generator: Transforms an item name before display
    """

    definition: str | None = None
    auto_highlight: bool = True
    highlight_on_subpath: bool = False
    selected_class: str = DEFAULT_SELECTED_CLASS
    active_leaf_class: str = DEFAULT_ACTIVE_LEAF_CLASS
    autogenerate_item_ids: bool = True
    id_generator: Callable[[object], str] = field(default=default_id_generator)
    name_generator: Callable[[Any, Any], Any] = field(default=default_name_generator)


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    navigation: NavigationConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for sitenav.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
            DefinitionError: If a configured generator cannot be imported
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(server=ServerConfig(), navigation=NavigationConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        server = cls._parse_server(data.get("server"))
        navigation = cls._parse_navigation(data.get("navigation"))

        return cls(server=server, navigation=navigation, config_path=path)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_navigation(cls, data: object) -> NavigationConfig:
        """Parse navigation configuration section.

        Generator references are imported here so that a broken reference
        fails at startup rather than on the first request.

        Args:
            data: Raw navigation section data

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig()

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        definition = data.get("definition")
        if definition is not None and not isinstance(definition, str):
            raise ValueError("navigation.definition must be a string")

        flags: dict[str, bool] = {}
        for name, default in (
            ("auto_highlight", True),
            ("highlight_on_subpath", False),
            ("autogenerate_item_ids", True),
        ):
            value = data.get(name, default)
            if not isinstance(value, bool):
                raise ValueError(f"navigation.{name} must be a boolean")
            flags[name] = value

        selected_class = data.get("selected_class", DEFAULT_SELECTED_CLASS)
        if not isinstance(selected_class, str):
            raise ValueError("navigation.selected_class must be a string")

        active_leaf_class = data.get("active_leaf_class", DEFAULT_ACTIVE_LEAF_CLASS)
        if not isinstance(active_leaf_class, str):
            raise ValueError("navigation.active_leaf_class must be a string")

        id_generator = data.get("id_generator")
        if id_generator is not None and not isinstance(id_generator, str):
            raise ValueError("navigation.id_generator must be a string")

        name_generator = data.get("name_generator")
        if name_generator is not None and not isinstance(name_generator, str):
            raise ValueError("navigation.name_generator must be a string")

        return NavigationConfig(
            definition=definition,
            selected_class=selected_class,
            active_leaf_class=active_leaf_class,
            id_generator=(
                load_callable(id_generator) if id_generator else default_id_generator
            ),
            name_generator=(
                load_callable(name_generator) if name_generator else default_name_generator
            ),
            **flags,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        definition: str | None = None,
        highlight_on_subpath: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. This follows
        the immutable pattern - the original Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            definition: Override navigation.definition
            highlight_on_subpath: Override navigation.highlight_on_subpath

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        navigation = self.navigation
        if definition is not None:
            navigation = replace(navigation, definition=definition)
        if highlight_on_subpath is not None:
            navigation = replace(navigation, highlight_on_subpath=highlight_on_subpath)

        return replace(self, server=server, navigation=navigation)
