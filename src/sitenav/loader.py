"""Import callables from ``module:attribute`` references.

Used for navigation definitions and for the id/name generators configured
in sitenav.toml.
"""

import importlib
import logging
from collections.abc import Callable
from typing import Any

from sitenav.errors import DefinitionError

logger = logging.getLogger(__name__)


def load_callable(reference: str) -> Callable[..., Any]:
    """Import the callable named by ``reference``.

    Args:
        reference: Dotted reference such as ``"mysite.nav:build"``.
            Nested attributes are allowed after the colon
            (``"mysite.nav:Menus.main"``).

    Returns:
        The referenced callable

    Raises:
        DefinitionError: If the reference is malformed, the module cannot
            be imported, the attribute is missing or not callable
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise DefinitionError(
            f"Invalid reference {reference!r}, expected 'module:attribute'",
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise DefinitionError(f"Cannot import module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise DefinitionError(
                f"Module {module_name!r} has no attribute {attr_path!r}",
            ) from e

    if not callable(target):
        raise DefinitionError(f"{reference!r} is not callable")

    logger.debug(f"Loaded {reference}")
    return target
