"""Tests for depth-first pre-order traversal and its depth bound."""

import pytest

from rmtreelib import (
    DepthFirstPreOrderTraverser,
    HierarchyAdapter,
    Item,
    ItemKind,
    DocSubtype,
    MAX_DEPTH,
    ROOT_KEY,
    TRASH_KEY,
    build_hierarchy,
)


def make_adapter(*items):
    return HierarchyAdapter(build_hierarchy({i.id: i for i in items}))


def chain(length, root_id="n0"):
    """A straight line of nested folders n0 > n1 > ... > n{length-1}."""
    items = [Item(root_id, "n0", ItemKind.FOLDER, "")]
    for index in range(1, length):
        items.append(Item(f"n{index}", f"n{index}", ItemKind.FOLDER, f"n{index - 1}"))
    return items


class TestPreOrder:
    def test_parent_before_children_in_sibling_order(self):
        adapter = make_adapter(
            Item("a", "A", ItemKind.FOLDER),
            Item("b", "B", ItemKind.FOLDER),
            Item("a1", "a1", ItemKind.DOCUMENT, "a", DocSubtype.PDF),
            Item("a2", "a2", ItemKind.FOLDER, "a"),
            Item("a2x", "x", ItemKind.DOCUMENT, "a2", DocSubtype.EPUB),
        )
        steps = list(DepthFirstPreOrderTraverser(adapter).traverse())
        assert [s.item.id for s in steps] == ["a", "a2", "a2x", "a1", "b"]
        assert [s.depth for s in steps] == [0, 1, 2, 1, 0]

    def test_last_flags_and_ancestors(self):
        adapter = make_adapter(
            Item("a", "A", ItemKind.FOLDER),
            Item("b", "B", ItemKind.FOLDER),
            Item("a1", "one", ItemKind.DOCUMENT, "a", DocSubtype.PDF),
        )
        steps = {s.item.id: s for s in DepthFirstPreOrderTraverser(adapter).traverse()}
        assert steps["a"].is_last is False
        assert steps["b"].is_last is True
        assert steps["a1"].is_last is True
        assert steps["a1"].ancestors_last == (False,)

    def test_path_parts_are_trimmed_names(self):
        adapter = make_adapter(
            Item("a", "  Spaced  ", ItemKind.FOLDER),
            Item("a1", "doc", ItemKind.DOCUMENT, "a", DocSubtype.PDF),
        )
        steps = list(DepthFirstPreOrderTraverser(adapter).traverse())
        assert steps[1].path_parts == ("Spaced",)

    def test_last_override(self):
        adapter = make_adapter(Item("a", "A", ItemKind.FOLDER))
        steps = list(DepthFirstPreOrderTraverser(adapter).traverse(last_override=False))
        assert steps[0].is_last is False

    def test_no_recurse_yields_direct_children_only(self):
        adapter = make_adapter(
            Item("t", "T", ItemKind.FOLDER, TRASH_KEY),
            Item("t1", "inner", ItemKind.DOCUMENT, "t", DocSubtype.PDF),
        )
        steps = list(DepthFirstPreOrderTraverser(adapter).traverse(TRASH_KEY, start_depth=1, recurse=False))
        assert [s.item.id for s in steps] == ["t"]
        assert steps[0].depth == 1

    def test_descend_predicate_prunes_subtree(self):
        adapter = make_adapter(
            Item("a", "A", ItemKind.FOLDER),
            Item("a1", "child", ItemKind.FOLDER, "a"),
        )
        visited = [s.item.id for s in DepthFirstPreOrderTraverser(adapter).traverse(
            descend=lambda item: item.id != "a")]
        assert visited == ["a"]

    def test_unreachable_items_are_not_visited(self):
        adapter = make_adapter(
            Item("a", "A", ItemKind.FOLDER),
            Item("lost", "lost", ItemKind.DOCUMENT, "missing", DocSubtype.PDF),
        )
        assert [s.item.id for s in DepthFirstPreOrderTraverser(adapter).traverse()] == ["a"]


class TestDepthBound:
    def test_chain_stops_at_max_depth(self):
        adapter = make_adapter(*chain(MAX_DEPTH + 10))
        steps = list(DepthFirstPreOrderTraverser(adapter).traverse(ROOT_KEY))
        assert len(steps) == MAX_DEPTH + 1
        assert steps[-1].depth == MAX_DEPTH

    def test_custom_bound(self):
        adapter = make_adapter(*chain(10))
        steps = list(DepthFirstPreOrderTraverser(adapter, max_depth=3).traverse())
        assert [s.depth for s in steps] == [0, 1, 2, 3]

    @pytest.mark.parametrize("cycle_length", [1, 2, 60])
    def test_cycle_reachable_from_root_terminates(self, cycle_length):
        # "root" as an item ID puts the item in its own bucket's subtree:
        # root bucket -> root item -> children filed under "root" -> ...
        items = [Item("root", "loop", ItemKind.FOLDER, "")]
        for index in range(1, cycle_length):
            items.append(Item(f"c{index}", f"c{index}", ItemKind.FOLDER,
                              "root" if index == 1 else f"c{index - 1}"))
        adapter = make_adapter(*items)
        steps = list(DepthFirstPreOrderTraverser(adapter).traverse())
        assert max(s.depth for s in steps) == MAX_DEPTH
