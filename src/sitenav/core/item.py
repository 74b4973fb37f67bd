"""Navigation item.

An item is one node of the navigation tree. It knows its owning container
(for level, configuration and request lookups) and may own a sub-navigation
one level deeper. Selection is resolved lazily and memoized, so a tree must
be rebuilt for every request it is rendered for.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypedDict, TypeVar

from sitenav.core.highlight import HighlightKind, HighlightRule
from sitenav.core.types import ItemOptions, ValueOrProducer
from sitenav.errors import InvalidHighlightRule

if TYPE_CHECKING:
    from sitenav.config import NavigationConfig
    from sitenav.core.container import ItemContainer
    from sitenav.core.request import RequestContext

logger = logging.getLogger(__name__)

ROOT_PATH = "/"

T = TypeVar("T")


class ItemDict(TypedDict, total=False):
    """Dictionary representation of a navigation item."""

    key: str
    name: Any
    url: str | None
    selected: bool
    active_leaf: bool
    html: dict[str, Any]
    children: list[ItemDict]


def _resolve(value: ValueOrProducer[T]) -> T:
    """Call zero-argument producers, return plain values as they are."""
    return value() if callable(value) else value


class Item:
    """A single navigation entry.

    Args:
        container: Container the item belongs to
        key: Identifier, unique among siblings
        name: Display name or a zero-argument callable producing it
        url: Target URL, a zero-argument callable producing it, or None
        options: Option bag (``html``, ``link_html``, ``method``,
            ``highlights_on``, ``items``, ``container``)
        builder: Called with a fresh sub-navigation container to populate it
    """

    __slots__ = (
        "_container",
        "_highlight_rule",
        "_key",
        "_name",
        "_options",
        "_selected",
        "_sub_navigation",
        "_url",
    )

    def __init__(
        self,
        container: ItemContainer,
        key: object,
        name: ValueOrProducer[Any],
        url: ValueOrProducer[str | None] = None,
        options: ItemOptions | None = None,
        builder: Callable[[ItemContainer], object] | None = None,
    ) -> None:
        self._container = container
        self._key = key
        self._name = _resolve(name)
        self._url = _resolve(url)
        self._options: ItemOptions = dict(options or {})
        self._highlight_rule = HighlightRule.coerce(self._options.get("highlights_on"))
        self._selected: bool | None = None
        self._sub_navigation: ItemContainer | None = None

        self._setup_sub_navigation(self._options.get("items"), builder)

    @property
    def key(self) -> object:
        return self._key

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def container(self) -> ItemContainer:
        return self._container

    @property
    def sub_navigation(self) -> ItemContainer | None:
        return self._sub_navigation

    @property
    def options(self) -> ItemOptions:
        return self._options

    @property
    def highlights_on(self) -> HighlightRule | None:
        """Explicit highlight rule, None when auto-highlighting applies."""
        return self._highlight_rule

    @property
    def method(self) -> str | None:
        """HTTP method the link should use (e.g., "delete")."""
        return self._options.get("method")

    @property
    def link_html_options(self) -> dict[str, Any] | None:
        """Attributes for the link element, as given by ``link_html``."""
        return self._options.get("link_html")

    @property
    def url_without_anchor(self) -> str | None:
        """URL with any ``#fragment`` removed."""
        if self._url is None:
            return None
        return self._url.split("#", 1)[0]

    @property
    def _config(self) -> NavigationConfig:
        return self._container.config

    @property
    def _request(self) -> RequestContext:
        return self._container.request

    def display_name(self, apply_generator: bool = True) -> Any:
        """Return the item's name.

        Args:
            apply_generator: Pass the name through the configured
                name_generator (default). When False the raw name is returned.
        """
        if apply_generator:
            return self._config.name_generator(self._name, self)
        return self._name

    def selected(self) -> bool:
        """Return True if the item should be rendered as selected.

        An item is selected if its sub-navigation contains a selected item
        or its own highlight condition holds. The result is computed once.

        Raises:
            InvalidHighlightRule: If highlights_on holds an unsupported value
        """
        if self._selected is None:
            self._selected = self.selected_by_subnav() or self.selected_by_condition()
            if self._selected:
                logger.debug(f"Item {self._key!r} selected for {self._request.request_uri}")
        return self._selected

    def selected_by_subnav(self) -> bool:
        """Return True if a descendant of this item is selected."""
        return self._sub_navigation is not None and self._sub_navigation.selected()

    def selected_by_condition(self) -> bool:
        """Return True if this item itself matches the current request."""
        if self._highlight_rule is not None:
            return self._selected_by_highlight_rule(self._highlight_rule)
        return self._selected_by_auto_highlight()

    def active_leaf(self) -> bool:
        """Return True if the item is selected directly, not via a child."""
        return self.selected() and not self.selected_by_subnav()

    def selected_class(self) -> str | None:
        """Selected class (container override first) if selected, else None."""
        if not self.selected():
            return None
        return self._container.selected_class or self._config.selected_class

    def active_leaf_class(self) -> str | None:
        """Configured active leaf class if this is the active leaf, else None."""
        if self.active_leaf():
            return self._config.active_leaf_class
        return None

    def render_options(self) -> dict[str, Any]:
        """Return HTML attributes for the item.

        Starts from the ``html`` option, defaults the id from the key when
        id autogeneration is enabled, and appends the selected and active
        leaf classes to any configured class.
        """
        html_opts: dict[str, Any] = dict(self._options.get("html") or {})
        if html_opts.get("id") is None:
            autogenerated_id = self._autogenerated_item_id()
            if autogenerated_id is not None:
                html_opts["id"] = autogenerated_id
            else:
                html_opts.pop("id", None)

        classes = [
            *_class_list(html_opts.get("class")),
            self.selected_class(),
            self.active_leaf_class(),
        ]
        class_value = " ".join(c for c in classes if c)
        if class_value:
            html_opts["class"] = class_value
        else:
            html_opts.pop("class", None)

        return html_opts

    html_options = render_options

    def fetch(
        self,
        compound_key: str,
        callback: Callable[[Item], Any] | None = None,
    ) -> Any:
        """Find the item addressed by ``compound_key`` below and including this one.

        Args:
            compound_key: Dot-separated key path starting with this item's key
            callback: Called with the found item; its result is returned
                instead of the item

        Returns:
            The item (or the callback's result), None if the path does not
            resolve through this item
        """
        head, _, rest = str(compound_key).partition(".")
        if head != str(self._key):
            return None
        if not rest:
            return callback(self) if callback is not None else self
        if self._sub_navigation is None:
            return None
        return self._sub_navigation.fetch(rest, callback)

    def store(self, compound_key: str, item: Item) -> bool:
        """Insert ``item`` at ``compound_key`` below this item.

        The sub-navigation is created on first use, and only when the item
        actually lands in it.

        Returns:
            True if stored, False if the path does not start with this item's
            key or names no position below it
        """
        head, _, rest = str(compound_key).partition(".")
        if head != str(self._key) or not rest:
            return False
        if self._sub_navigation is not None:
            return self._sub_navigation.store(rest, item)

        sub_navigation = self._container.descend()
        if not sub_navigation.store(rest, item):
            return False
        self._sub_navigation = sub_navigation
        return True

    def to_dict(self) -> ItemDict:
        """Convert to dictionary for JSON serialization."""
        result: ItemDict = {
            "key": str(self._key),
            "name": self.display_name(),
            "url": self._url,
            "selected": self.selected(),
            "active_leaf": self.active_leaf(),
            "html": self.render_options(),
        }
        if self._sub_navigation is not None and not self._sub_navigation.is_empty():
            result["children"] = self._sub_navigation.to_list()
        return result

    def _adopt(self, container: ItemContainer, key: object) -> None:
        """Move the item, with its whole subtree, into ``container`` under ``key``."""
        self._container = container
        self._key = key
        self._selected = None
        if self._sub_navigation is not None:
            self._sub_navigation._move_below(container)

    def _setup_sub_navigation(
        self,
        items: Iterable[Item | Mapping[str, Any]] | None,
        builder: Callable[[ItemContainer], object] | None,
    ) -> None:
        if builder is None and items is None:
            return

        self._sub_navigation = self._container.descend()
        if builder is not None:
            builder(self._sub_navigation)
        else:
            self._sub_navigation.items = items

    def _autogenerated_item_id(self) -> str | None:
        if self._config.autogenerate_item_ids:
            return self._config.id_generator(self._key)
        return None

    def _auto_highlight(self) -> bool:
        return self._config.auto_highlight and self._container.auto_highlight

    def _root_path_match(self) -> bool:
        return self._url == ROOT_PATH and self._request.request_path == ROOT_PATH

    def _selected_by_auto_highlight(self) -> bool:
        if not self._auto_highlight():
            return False
        return (
            self._root_path_match()
            or self._request.is_current_page(self.url_without_anchor)
            or (self._config.highlight_on_subpath and self._selected_by_subpath())
        )

    def _selected_by_highlight_rule(self, rule: HighlightRule) -> bool:
        if rule.kind is HighlightKind.PATTERN and rule.pattern is not None:
            return rule.pattern.search(self._request.request_uri) is not None
        if rule.kind is HighlightKind.PREDICATE and rule.predicate is not None:
            return bool(rule.predicate())
        if rule.kind is HighlightKind.SUBPATH:
            return self._selected_by_subpath()
        raise InvalidHighlightRule(
            f"highlights_on for item {self._key!r} must be a regex, "
            f"a callable or 'subpath', got {rule.raw!r}",
        )

    def _selected_by_subpath(self) -> bool:
        url = self.url_without_anchor
        if url is None:
            return False
        pattern = rf"^{re.escape(url)}(/|$|\?)"
        return re.search(pattern, self._request.request_uri, re.IGNORECASE) is not None

    def __repr__(self) -> str:
        return f"Item(key={self._key!r}, url={self._url!r}, level={self._container.level})"


def _class_list(value: object) -> list[str]:
    """Normalize a class option given as a string or a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return [str(v) for v in value if v]
    return [str(value)]
