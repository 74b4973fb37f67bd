"""CLI interface for Sitenav.

Command-line tool for serving and inspecting navigation trees.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from sitenav.config import Config
from sitenav.core.container import ItemContainer
from sitenav.core.navigation import build_navigation, resolve_definition
from sitenav.core.request import PathRequestContext
from sitenav.errors import NavigationError

_CONFIG_OPTION_HELP = "Path to configuration file (default: auto-discover sitenav.toml)"
_DEFINITION_OPTION_HELP = "Navigation definition as module:callable (overrides config)"


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def cli(verbose: bool) -> None:
    """Sitenav - navigation menus that know where you are."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=_CONFIG_OPTION_HELP,
)
@click.option(
    "--definition",
    "-d",
    default=None,
    help=_DEFINITION_OPTION_HELP,
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
def serve(
    config_path: Path | None,
    definition: str | None,
    host: str | None,
    port: int | None,
) -> None:
    """Start the navigation API server."""
    from sitenav.server import run_server

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            definition=definition,
        )
        resolve_definition(config.navigation)
    except (NavigationError, ValueError) as e:
        _fail(e)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Navigation definition: {config.navigation.definition}")
    if config.navigation.highlight_on_subpath:
        click.echo("Subpath highlighting: enabled")
    else:
        click.echo("Subpath highlighting: disabled")

    run_server(config)


@cli.command()
@click.argument("path", default="/")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=_CONFIG_OPTION_HELP,
)
@click.option(
    "--definition",
    "-d",
    default=None,
    help=_DEFINITION_OPTION_HELP,
)
@click.option(
    "--subpath/--no-subpath",
    default=None,
    help="Enable/disable subpath highlighting (overrides config)",
)
def show(
    path: str,
    config_path: Path | None,
    definition: str | None,
    subpath: bool | None,
) -> None:
    """Print the navigation tree as seen from PATH.

    Selected items are marked with '*', the active leaf with '>'.
    """
    try:
        config = Config.load(config_path).with_overrides(
            definition=definition,
            highlight_on_subpath=subpath,
        )
        nav_definition = resolve_definition(config.navigation)
        if not path.startswith("/"):
            path = f"/{path}"
        root = build_navigation(
            nav_definition,
            config.navigation,
            PathRequestContext.from_uri(path),
        )
        lines = _format_tree(root)
    except (NavigationError, ValueError) as e:
        _fail(e)

    for line in lines:
        click.echo(line)


def _format_tree(container: ItemContainer, indent: int = 0) -> list[str]:
    """Render a container as indented text lines.

    Args:
        container: Container to render
        indent: Number of leading spaces for this level

    Returns:
        One line per item, children following their parent
    """
    lines: list[str] = []
    for item in container:
        if item.active_leaf():
            marker = ">"
        elif item.selected():
            marker = "*"
        else:
            marker = " "
        url = item.url if item.url is not None else "-"
        lines.append(f"{' ' * indent}{marker} {item.display_name()} ({url})")
        if item.sub_navigation is not None:
            lines.extend(_format_tree(item.sub_navigation, indent + 2))
    return lines


def _fail(error: Exception) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)
