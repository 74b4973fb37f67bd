"""Tests for navigation item containers."""

import pytest
from sitenav.core.container import ItemContainer
from sitenav.core.item import Item

from tests.conftest import RootFactory


def _build_tree(root: ItemContainer) -> ItemContainer:
    """Populate root with a small three-level tree.

    home        /
    docs        /docs
      guide     /docs/guide
        install /docs/guide/install
      api       /docs/api
    about       /about
    """
    root.item("home", "Home", "/")
    root.item(
        "docs",
        "Docs",
        "/docs",
        builder=lambda docs: (
            docs.item(
                "guide",
                "Guide",
                "/docs/guide",
                builder=lambda guide: guide.item("install", "Install", "/docs/guide/install"),
            ),
            docs.item("api", "API", "/docs/api"),
        ),
    )
    root.item("about", "About", "/about")
    return root


class TestItemCreation:
    """Tests for ItemContainer.item()."""

    def test__items__kept_in_insertion_order(self, make_root: RootFactory) -> None:
        root = make_root()

        root.item("b", "B", "/b")
        root.item("a", "A", "/a")
        root.item("c", "C", "/c")

        assert [item.key for item in root] == ["b", "a", "c"]
        assert len(root) == 3
        assert root.is_empty() is False

    def test__new_container__is_empty(self, make_root: RootFactory) -> None:
        root = make_root()

        assert root.is_empty() is True
        assert root.level == 1

    def test__if_false__item_skipped(self, make_root: RootFactory) -> None:
        """Skip items whose 'if' condition is false."""
        root = make_root()

        result = root.item("admin", "Admin", "/admin", {"if": lambda: False})

        assert result is None
        assert root.is_empty()

    def test__if_true__item_added_without_condition_option(
        self,
        make_root: RootFactory,
    ) -> None:
        """Conditions are not stored on the item."""
        root = make_root()

        item = root.item("admin", "Admin", "/admin", {"if": True, "method": "get"})

        assert item is not None
        assert "if" not in item.options
        assert item.options["method"] == "get"

    @pytest.mark.parametrize("condition", [True, lambda: True])
    def test__unless_true__item_skipped(
        self,
        make_root: RootFactory,
        condition: object,
    ) -> None:
        """Skip items whose 'unless' condition is true."""
        root = make_root()

        result = root.item("login", "Log in", "/login", {"unless": condition})

        assert result is None
        assert root.is_empty()

    def test__duplicate_key__warns(
        self,
        make_root: RootFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Duplicate sibling keys are logged."""
        root = make_root()

        root.item("docs", "Docs", "/docs")
        root.item("docs", "Docs again", "/docs2")

        assert "Duplicate key 'docs'" in caplog.text


class TestItemsAssignment:
    """Tests for the items setter."""

    def test__mappings__converted_to_items(self, make_root: RootFactory) -> None:
        root = make_root("/b")

        root.items = [
            {"key": "a", "name": "A", "url": "/a"},
            {"key": "b", "name": "B", "url": "/b", "options": {"html": {"class": "x"}}},
        ]

        assert [item.key for item in root] == ["a", "b"]
        b = root["b"]
        assert b is not None
        assert b.render_options()["class"] == "x selected active-leaf"

    def test__items__adopted_by_container(self, make_root: RootFactory) -> None:
        root = make_root()
        other = make_root()
        item = Item(other, "docs", "Docs", "/docs")

        root.items = [item]

        assert root["docs"] is item
        assert item.container is root

    def test__nested_item__subtree_rewired(self, make_root: RootFactory) -> None:
        """Adopted items bring their children one level below the container."""
        root = make_root("/docs/intro")
        elsewhere = make_root("/elsewhere")
        docs = Item(
            elsewhere.descend(),
            "docs",
            "Docs",
            "/docs",
            builder=lambda sub: sub.item("intro", "Intro", "/docs/intro"),
        )
        assert docs.sub_navigation is not None
        assert docs.sub_navigation.level == 3

        root.items = [docs]

        assert docs.sub_navigation.level == 2
        assert docs.sub_navigation.request is root.request
        assert docs.selected() is True
        assert docs.selected_by_subnav() is True
    def test__conditions__respected(self, make_root: RootFactory) -> None:
        root = make_root()

        root.items = [
            {"key": "a", "name": "A", "options": {"if": False}},
            {"key": "b", "name": "B", "options": {"unless": False}},
        ]

        assert [item.key for item in root] == ["b"]


class TestLookup:
    """Tests for key lookups."""

    def test__getitem__direct_child(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        docs = root["docs"]

        assert docs is not None
        assert docs.url == "/docs"

    def test__getitem__missing_or_nested__returns_none(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        assert root["missing"] is None
        assert root["guide"] is None

    def test__level_for_item__searches_depth_first(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        assert root.level_for_item("about") == 1
        assert root.level_for_item("api") == 2
        assert root.level_for_item("install") == 3
        assert root.level_for_item("missing") is None


class TestContainerFetch:
    """Tests for ItemContainer.fetch()."""

    def test__compound_key__returns_nested_item(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        found = root.fetch("docs.guide")

        assert isinstance(found, Item)
        assert found.key == "guide"

    def test__single_key__returns_root_item(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        assert root.fetch("about") is root["about"]

    def test__missing_leaf__returns_none(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        assert root.fetch("docs.missing") is None

    def test__missing_head__returns_none(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        assert root.fetch("blog.guide") is None

    def test__through_leaf__returns_none(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())

        assert root.fetch("about.team") is None

    def test__callback__invoked_with_found_item(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())
        seen: list[Item] = []

        result = root.fetch("docs.guide.install", lambda item: seen.append(item) or "done")

        assert result == "done"
        assert [item.key for item in seen] == ["install"]


class TestContainerStore:
    """Tests for ItemContainer.store()."""

    def test__under_leaf__creates_sub_navigation(self, make_root: RootFactory) -> None:
        """Store below an item without children."""
        root = _build_tree(make_root())
        new_item = Item(root, "new", "Team", "/about/team")

        assert root.store("about.team", new_item) is True

        about = root["about"]
        assert about is not None
        assert about.sub_navigation is not None
        assert about.sub_navigation.level == 2
        assert root.fetch("about.team") is new_item
        assert new_item.key == "team"

    def test__deep_path__stored_in_existing_container(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())
        new_item = Item(root, "upgrade", "Upgrade", "/docs/guide/upgrade")

        assert root.store("docs.guide.upgrade", new_item) is True

        guide = root.fetch("docs.guide")
        assert isinstance(guide, Item)
        assert guide.sub_navigation is not None
        assert [item.key for item in guide.sub_navigation] == ["install", "upgrade"]
        assert new_item.container.level == 3

    def test__single_segment__appended(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())
        new_item = Item(root, "blog", "Blog", "/blog")

        assert root.store("blog", new_item) is True

        assert [item.key for item in root] == ["home", "docs", "about", "blog"]

    def test__existing_key__replaced_in_place(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())
        new_item = Item(root, "docs", "Documentation", "/documentation")

        assert root.store("docs", new_item) is True

        assert [item.key for item in root] == ["home", "docs", "about"]
        assert root["docs"] is new_item

    def test__unknown_head__returns_false(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())
        new_item = Item(root, "x", "X", "/x")

        assert root.store("blog.x", new_item) is False
        assert root.fetch("blog.x") is None

    def test__empty_key__returns_false(self, make_root: RootFactory) -> None:
        root = make_root()

        assert root.store("", Item(root, "x", "X")) is False
        assert root.is_empty()

    def test__trailing_dot__returns_false_without_sub_navigation(
        self,
        make_root: RootFactory,
    ) -> None:
        """A key ending in a dot names no position and changes nothing."""
        root = _build_tree(make_root("/about"))
        new_item = Item(root, "x", "X", "/x")

        assert root.store("about.", new_item) is False

        about = root["about"]
        assert about is not None
        assert about.sub_navigation is None
        assert root.active_leaf_container() is root

    def test__item_with_children__subtree_moved_to_new_tree(
        self,
        make_root: RootFactory,
    ) -> None:
        """Stored subtrees take the level and request of their new place."""
        root = _build_tree(make_root("/docs/guide/child"))
        elsewhere = make_root("/elsewhere")
        guide = Item(
            elsewhere,
            "guide",
            "Guide",
            "/docs/guide",
            builder=lambda sub: sub.item("child", "Child", "/docs/guide/child"),
        )

        assert root.store("docs.guide", guide) is True

        child = root.fetch("docs.guide.child")
        assert isinstance(child, Item)
        assert guide.container.level == 2
        assert child.container.level == 3
        assert child.container.request is root.request
        assert child.selected() is True
        assert guide.selected() is True
        assert root.level_for_item("child") == 3
        assert root.active_leaf_container() is child.container


class TestContainerSelection:
    """Tests for selection aggregation."""

    def test__any_item_selected__container_selected(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root("/about"))

        assert root.selected() is True

    def test__no_item_selected__container_not_selected(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root("/contact"))

        assert root.selected() is False

    def test__nested_selection__propagates(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root("/docs/guide/install"))

        assert root.selected() is True
        docs = root["docs"]
        assert docs is not None
        assert docs.selected() is True
        assert docs.active_leaf() is False

    def test__selection__is_pure_or_over_items(self, make_root: RootFactory) -> None:
        """Containers have no subpath logic of their own."""
        root = make_root("/docs/intro", highlight_on_subpath=True)
        root.item("docs", "Docs", "/docs", {"highlights_on": lambda: False})
        root.item("blog", "Blog", "/blog")

        assert [item.selected() for item in root] == [False, False]
        assert root.selected() is False

    def test__empty_container__not_selected(self, make_root: RootFactory) -> None:
        assert make_root("/").selected() is False

    def test__selected_item__returns_first_selected(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root("/docs/api"))

        selected = root.selected_item()

        assert selected is not None
        assert selected.key == "docs"

    def test__selected_item__none_when_nothing_selected(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root("/contact"))

        assert root.selected_item() is None


class TestActiveContainers:
    """Tests for active_item_container_for() and active_leaf_container()."""

    def test__active_container_for_level__follows_selection(
        self,
        make_root: RootFactory,
    ) -> None:
        root = _build_tree(make_root("/docs/guide/install"))

        level_2 = root.active_item_container_for(2)
        level_3 = root.active_item_container_for(3)

        assert root.active_item_container_for(1) is root
        assert level_2 is not None
        assert [item.key for item in level_2] == ["guide", "api"]
        assert level_3 is not None
        assert [item.key for item in level_3] == ["install"]
        assert root.active_item_container_for(4) is None

    def test__active_container_for_level__none_without_selection(
        self,
        make_root: RootFactory,
    ) -> None:
        root = _build_tree(make_root("/contact"))

        assert root.active_item_container_for(2) is None

    def test__active_leaf_container__deepest_selected_level(
        self,
        make_root: RootFactory,
    ) -> None:
        root = _build_tree(make_root("/docs/api"))

        leaf_container = root.active_leaf_container()

        assert leaf_container.level == 2
        assert [item.key for item in leaf_container] == ["guide", "api"]

    def test__active_leaf_container__root_without_selection(
        self,
        make_root: RootFactory,
    ) -> None:
        root = _build_tree(make_root("/contact"))

        assert root.active_leaf_container() is root


class TestDomAttributes:
    """Tests for container DOM attributes."""

    def test__defaults__level_class_only(self, make_root: RootFactory) -> None:
        root = make_root()

        assert root.dom_attributes() == {"class": "nav-level-1"}

    def test__child_container__deeper_level_class(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root())
        docs = root["docs"]

        assert docs is not None
        assert docs.sub_navigation is not None
        assert docs.sub_navigation.dom_attributes() == {"class": "nav-level-2"}

    def test__container_option__sets_attributes(self, make_root: RootFactory) -> None:
        """An item's 'container' option configures its container."""
        root = make_root("/docs")

        item = root.item(
            "docs",
            "Docs",
            "/docs",
            {
                "container": {
                    "id": "main-nav",
                    "class": "menu",
                    "selected_class": "current",
                    "attributes": {"role": "navigation"},
                },
            },
        )

        assert item is not None
        assert root.dom_attributes() == {
            "id": "main-nav",
            "class": "menu nav-level-1",
            "role": "navigation",
        }
        assert root.selected_class == "current"
        assert item.render_options()["class"] == "current active-leaf"


class TestToList:
    """Tests for ItemContainer.to_list()."""

    def test__serializes_items_in_order(self, make_root: RootFactory) -> None:
        root = _build_tree(make_root("/about"))

        data = root.to_list()

        assert [entry["key"] for entry in data] == ["home", "docs", "about"]
        assert [entry["selected"] for entry in data] == [False, False, True]
        assert "children" in data[1]
        assert "children" not in data[2]
