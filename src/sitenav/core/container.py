"""Navigation item container.

Holds the ordered items of one navigation level. Every container carries
the navigation configuration and the request context so that items can
resolve their selection without global state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from sitenav.core.item import Item, ItemDict
from sitenav.core.types import ItemOptions, ValueOrProducer

if TYPE_CHECKING:
    from sitenav.config import NavigationConfig
    from sitenav.core.request import RequestContext

logger = logging.getLogger(__name__)

ROOT_LEVEL = 1

# Options consumed by the container, never stored on items
_CONDITION_KEYS = ("if", "unless")


class ItemContainer:
    """Ordered collection of navigation items at one level.

    Args:
        config: Navigation configuration shared by the whole tree
        request: Context of the request the tree is resolved for
        level: Depth of this container, 1 for the root
    """

    def __init__(
        self,
        config: NavigationConfig,
        request: RequestContext,
        level: int = ROOT_LEVEL,
    ) -> None:
        self._config = config
        self._request = request
        self._level = level
        self._items: list[Item] = []
        self.auto_highlight = True
        self.selected_class: str | None = None
        self.dom_id: str | None = None
        self.dom_class: str | None = None
        self._dom_attributes: dict[str, Any] = {}

    @property
    def config(self) -> NavigationConfig:
        return self._config

    @property
    def request(self) -> RequestContext:
        return self._request

    @property
    def level(self) -> int:
        return self._level

    @property
    def items(self) -> list[Item]:
        return self._items

    @items.setter
    def items(self, new_items: Iterable[Item | Mapping[str, Any]]) -> None:
        """Add pre-built items.

        Accepts Item instances or mappings with ``key``, ``name`` and
        optionally ``url``, ``options`` and nested ``items``. Items whose
        ``if``/``unless`` options exclude them are skipped.
        """
        for entry in new_items:
            if isinstance(entry, Item):
                options = entry.options
                if not _should_add_item(options):
                    continue
                entry._adopt(self, entry.key)
                self._add_item(entry, options)
                continue

            options = dict(entry.get("options") or {})
            if "items" in entry:
                options["items"] = entry["items"]
            self.item(entry["key"], entry["name"], entry.get("url"), options)

    def descend(self) -> ItemContainer:
        """Create an empty container one level below this one."""
        return ItemContainer(self._config, self._request, self._level + 1)

    def _move_below(self, parent: ItemContainer) -> None:
        """Re-attach this container and its items one level below ``parent``."""
        self._config = parent.config
        self._request = parent.request
        self._level = parent.level + 1
        for item in self._items:
            item._adopt(self, item.key)

    def item(
        self,
        key: object,
        name: ValueOrProducer[Any],
        url: ValueOrProducer[str | None] = None,
        options: ItemOptions | None = None,
        builder: Callable[[ItemContainer], object] | None = None,
    ) -> Item | None:
        """Create a navigation item and append it to this container.

        Args:
            key: Identifier, unique among siblings
            name: Display name or a zero-argument callable producing it
            url: Target URL or a zero-argument callable producing it
            options: Item options; ``if``/``unless`` (bool or zero-argument
                callable) decide whether the item is added at all
            builder: Populates the item's sub-navigation

        Returns:
            The new item, or None if a condition excluded it
        """
        options = dict(options or {})
        if not _should_add_item(options):
            logger.debug(f"Skipping item {key!r} at level {self._level}")
            return None
        for condition in _CONDITION_KEYS:
            options.pop(condition, None)

        new_item = Item(self, key, name, url, options, builder)
        self._add_item(new_item, options)
        return new_item

    def __getitem__(self, key: object) -> Item | None:
        """Return the direct child with ``key``, None if absent."""
        for item in self._items:
            if str(item.key) == str(key):
                return item
        return None

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def fetch(
        self,
        compound_key: str,
        callback: Callable[[Item], Any] | None = None,
    ) -> Any:
        """Find an item anywhere below this container by compound key.

        Args:
            compound_key: Dot-separated key path (e.g., "docs.guide")
            callback: Called with the found item; its result is returned

        Returns:
            The item (or callback result) of the first child resolving the
            path, None if no child does
        """
        for item in self._items:
            result = item.fetch(compound_key, callback)
            if result is not None:
                return result
        return None

    def store(self, compound_key: str, item: Item) -> bool:
        """Insert ``item`` at ``compound_key`` below this container.

        A single-segment key stores the item directly in this container
        under that key, replacing a sibling with the same key. Longer keys
        are handed to the child whose key matches the first segment.

        Returns:
            True if stored, False if the key is empty or no child matches
            the path
        """
        compound_key = str(compound_key)
        if not compound_key:
            return False

        if "." not in compound_key:
            item._adopt(self, compound_key)
            for index, existing in enumerate(self._items):
                if str(existing.key) == compound_key:
                    logger.warning(f"Replacing item {compound_key!r} at level {self._level}")
                    self._items[index] = item
                    return True
            self._items.append(item)
            return True

        return any(child.store(compound_key, item) for child in self._items)

    def selected(self) -> bool:
        """Return True if any item in this container is selected."""
        return any(item.selected() for item in self._items)

    def selected_item(self) -> Item | None:
        """Return the first selected item, None if nothing is selected."""
        for item in self._items:
            if item.selected():
                return item
        return None

    def level_for_item(self, key: object) -> int | None:
        """Return the level of the item with ``key`` searching depth-first."""
        if self[key] is not None:
            return self._level
        for item in self._items:
            if item.sub_navigation is None:
                continue
            level = item.sub_navigation.level_for_item(key)
            if level is not None:
                return level
        return None

    def active_item_container_for(self, desired_level: int) -> ItemContainer | None:
        """Return the container on the selected branch at ``desired_level``.

        Returns:
            This container when it is at desired_level, otherwise the
            matching container below the selected item, None when the
            selected branch does not reach that level
        """
        if self._level == desired_level:
            return self
        selected = self.selected_item()
        if selected is None or selected.sub_navigation is None:
            return None
        return selected.sub_navigation.active_item_container_for(desired_level)

    def active_leaf_container(self) -> ItemContainer:
        """Return the deepest container on the selected branch."""
        selected = self.selected_item()
        if selected is not None and selected.sub_navigation is not None:
            return selected.sub_navigation.active_leaf_container()
        return self

    def dom_attributes(self) -> dict[str, Any]:
        """Return HTML attributes for the container element.

        The class always includes the level class ``nav-level-<n>``; explicit
        attributes override the id and class derived from dom_id/dom_class.
        """
        classes = [self.dom_class, f"nav-level-{self._level}"]
        attributes: dict[str, Any] = {"class": " ".join(c for c in classes if c)}
        if self.dom_id:
            attributes["id"] = self.dom_id
        attributes.update(self._dom_attributes)
        return attributes

    def set_dom_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._dom_attributes = dict(attributes)

    def to_list(self) -> list[ItemDict]:
        """Convert items to a list of dictionaries for JSON serialization."""
        return [item.to_dict() for item in self._items]

    def _add_item(self, item: Item, options: ItemOptions) -> None:
        if self[item.key] is not None:
            logger.warning(f"Duplicate key {item.key!r} at level {self._level}")
        self._items.append(item)
        self._modify_dom_attributes(options)

    def _modify_dom_attributes(self, options: ItemOptions) -> None:
        """Apply container attributes declared on an item's ``container`` option."""
        container_options = options.get("container")
        if not container_options:
            return
        if "attributes" in container_options:
            self.set_dom_attributes(container_options["attributes"])
        self.dom_class = container_options.get("class", self.dom_class)
        self.dom_id = container_options.get("id", self.dom_id)
        self.selected_class = container_options.get("selected_class", self.selected_class)

    def __repr__(self) -> str:
        return f"ItemContainer(level={self._level}, items={len(self._items)})"


def _should_add_item(options: Mapping[str, Any]) -> bool:
    """Evaluate the ``if``/``unless`` options of an item."""
    if "if" in options and not _evaluate(options["if"]):
        return False
    if "unless" in options and _evaluate(options["unless"]):
        return False
    return True


def _evaluate(condition: object) -> bool:
    return bool(condition() if callable(condition) else condition)
