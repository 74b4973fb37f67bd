"""Core type definitions."""

from collections.abc import Callable
from typing import Any, TypeAlias, TypeVar

T = TypeVar("T")

# Either a plain value or a zero-argument callable producing it
ValueOrProducer: TypeAlias = T | Callable[[], T]

# Free-form item options (html, link_html, highlights_on, ...)
ItemOptions: TypeAlias = dict[str, Any]
