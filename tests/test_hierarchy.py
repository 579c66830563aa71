"""Tests for hierarchy reconstruction and sibling ordering."""

import random
import unittest

from rmtreelib import (
    Hierarchy,
    HierarchyAdapter,
    Item,
    ItemKind,
    DocSubtype,
    ROOT_KEY,
    TRASH_KEY,
    build_children_map,
    build_hierarchy,
    sort_children,
)


def folder(item_id, name, parent=""):
    return Item(item_id, name, ItemKind.FOLDER, parent)


def doc(item_id, name, parent="", subtype=DocSubtype.PDF):
    return Item(item_id, name, ItemKind.DOCUMENT, parent, subtype)


def sample_items():
    items = [
        doc("d-b", "beta", ""),
        folder("f-z", "Zeta", ""),
        doc("d-a", "alpha", ""),
        folder("f-a", "Archive", ""),
        doc("d-in", "inside", "f-a"),
        folder("f-in", "Nested", "f-a"),
        doc("d-t", "trashed", TRASH_KEY),
        doc("orphan", "lost", "no-such-folder"),
    ]
    return {item.id: item for item in items}


class TestChildrenMap(unittest.TestCase):
    def test_every_item_appears_once_under_its_parent(self):
        items = sample_items()
        children = build_children_map(items)

        seen = [item.id for bucket in children.values() for item in bucket]
        self.assertEqual(sorted(seen), sorted(items))
        for key, bucket in children.items():
            for item in bucket:
                self.assertEqual(item.parent_key, key)

    def test_empty_parent_maps_to_root(self):
        children = build_children_map(sample_items())
        self.assertEqual({i.id for i in children[ROOT_KEY]}, {"d-b", "f-z", "d-a", "f-a"})

    def test_dangling_parent_gets_its_own_bucket(self):
        children = build_children_map(sample_items())
        self.assertEqual([i.id for i in children["no-such-folder"]], ["orphan"])


class TestOrdering(unittest.TestCase):
    def test_folders_first_then_names(self):
        children = build_children_map(sample_items())
        sort_children(children)
        self.assertEqual([i.name for i in children[ROOT_KEY]], ["Archive", "Zeta", "alpha", "beta"])
        self.assertEqual([i.name for i in children["f-a"]], ["Nested", "inside"])

    def test_order_independent_of_input_order(self):
        items = list(sample_items().values())
        expected = [i.id for i in build_hierarchy({i.id: i for i in items}).roots]
        rng = random.Random(1234)
        for _ in range(10):
            rng.shuffle(items)
            shuffled = build_hierarchy({i.id: i for i in items})
            self.assertEqual([i.id for i in shuffled.roots], expected)

    def test_lexical_comparison_is_case_sensitive(self):
        items = {i.id: i for i in [doc("1", "apple"), doc("2", "Banana")]}
        self.assertEqual([i.name for i in build_hierarchy(items).roots], ["Banana", "apple"])


class TestHierarchy(unittest.TestCase):
    def setUp(self):
        self.hierarchy = build_hierarchy(sample_items())

    def test_roots_and_trash(self):
        self.assertEqual(len(self.hierarchy.roots), 4)
        self.assertEqual([i.id for i in self.hierarchy.trash], ["d-t"])

    def test_children_of_unknown_key_is_empty(self):
        self.assertEqual(self.hierarchy.children_of("whatever"), [])

    def test_count_kinds_includes_unreachable_and_trash(self):
        # 3 folders + trash folder, 5 documents (orphan included)
        self.assertEqual(self.hierarchy.count_kinds(), (4, 5))

    def test_count_kinds_without_trash(self):
        items = {i.id: i for i in [folder("a", "A"), doc("b", "B", "a")]}
        self.assertEqual(build_hierarchy(items).count_kinds(), (1, 1))

    def test_len_and_contains(self):
        self.assertEqual(len(self.hierarchy), 8)
        self.assertIn("orphan", self.hierarchy)

    def test_build_is_deterministic(self):
        again = Hierarchy(sample_items())
        self.assertEqual(
            {k: [i.id for i in v] for k, v in again.children.items()},
            {k: [i.id for i in v] for k, v in self.hierarchy.children.items()},
        )


class TestHierarchyAdapter(unittest.TestCase):
    def setUp(self):
        self.items = sample_items()
        self.adapter = HierarchyAdapter(build_hierarchy(self.items))

    def test_get_children(self):
        self.assertEqual([i.id for i in self.adapter.get_children("f-a")], ["f-in", "d-in"])

    def test_get_children_unknown_key(self):
        self.assertEqual(list(self.adapter.get_children("d-in")), [])


if __name__ == "__main__":
    unittest.main()
