"""Highlight rules for explicit item selection.

An item may carry a ``highlights_on`` option that replaces auto-highlighting.
The raw option is coerced once, at item construction, into a HighlightRule
whose kind is matched exhaustively when selection is resolved.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

SUBPATH_MARKER = "subpath"


class HighlightKind(Enum):
    """Kind of highlight rule."""

    PATTERN = "pattern"
    PREDICATE = "predicate"
    SUBPATH = "subpath"
    INVALID = "invalid"


@dataclass(frozen=True)
class HighlightRule:
    """Tagged highlight rule: a kind plus its payload.

    Only one of ``pattern`` and ``predicate`` is set, matching ``kind``.
    ``raw`` keeps the original option value of an INVALID rule so the
    error raised at selection time can name it.
    """

    kind: HighlightKind
    pattern: re.Pattern[str] | None = None
    predicate: Callable[[], bool] | None = None
    raw: object = None

    @classmethod
    def matching(cls, pattern: re.Pattern[str]) -> "HighlightRule":
        """Rule selecting the item when the request URI matches ``pattern``."""
        return cls(HighlightKind.PATTERN, pattern=pattern)

    @classmethod
    def when(cls, predicate: Callable[[], bool]) -> "HighlightRule":
        """Rule selecting the item when ``predicate()`` is true."""
        return cls(HighlightKind.PREDICATE, predicate=predicate)

    @classmethod
    def subpath(cls) -> "HighlightRule":
        """Rule selecting the item for its URL and everything below it."""
        return cls(HighlightKind.SUBPATH)

    @classmethod
    def coerce(cls, value: object) -> "HighlightRule | None":
        """Build a rule from a raw ``highlights_on`` option.

        Args:
            value: None, a HighlightRule, a compiled regex, a callable
                or the ``"subpath"`` marker

        Returns:
            HighlightRule, or None when value is None. Unrecognized values
            produce an INVALID rule instead of raising.
        """
        if value is None:
            return None
        if isinstance(value, HighlightRule):
            return value
        if isinstance(value, re.Pattern):
            return cls.matching(value)
        if value == SUBPATH_MARKER:
            return cls.subpath()
        if callable(value):
            return cls.when(value)
        return cls(HighlightKind.INVALID, raw=value)
