"""Hierarchy reconstruction.

Turns the flat item table into a parent key -> ordered children index.
Items stay in the table; the index only holds references into it, so a
malformed (even cyclic) parent chain never produces a recursive structure.
"""

from typing import Dict, Iterator, List, Mapping, Tuple

from .core.adapter import TreeAdapter
from .core.item import Item, ItemKind, ROOT_KEY, TRASH_KEY


def build_children_map(items: Mapping[str, Item]) -> Dict[str, List[Item]]:
    """Group items by parent key in a single pass.

    Parent IDs are not checked against the table: children of a missing
    parent get a bucket that nothing ever reaches from "root".
    """
    children: Dict[str, List[Item]] = {}
    for item in items.values():
        children.setdefault(item.parent_key, []).append(item)
    return children


def sort_children(children: Dict[str, List[Item]]) -> None:
    """Sort every bucket in place: folders first, then by name."""
    for bucket in children.values():
        bucket.sort(key=lambda item: item.sort_key)


class Hierarchy:
    """The item table plus its ordered children index.

    Read-only once built.
    """

    def __init__(self, items: Mapping[str, Item]):
        self.items: Dict[str, Item] = dict(items)
        self.children = build_children_map(self.items)
        sort_children(self.children)

    @property
    def roots(self) -> List[Item]:
        return self.children.get(ROOT_KEY, [])

    @property
    def trash(self) -> List[Item]:
        return self.children.get(TRASH_KEY, [])

    def children_of(self, key: str) -> List[Item]:
        return self.children.get(key, [])

    def count_kinds(self) -> Tuple[int, int]:
        """Count directories and files over the whole item table.

        Unreachable items are counted too, and a non-empty trash adds one
        directory for the synthetic trash folder.

        Returns:
            (directory count, file count)
        """
        dir_count = sum(1 for item in self.items.values() if item.kind is ItemKind.FOLDER)
        file_count = len(self.items) - dir_count
        if self.trash:
            dir_count += 1
        return dir_count, file_count

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self.items


class HierarchyAdapter(TreeAdapter):
    """TreeAdapter over a built Hierarchy."""

    def __init__(self, hierarchy: Hierarchy):
        self.hierarchy = hierarchy

    def get_children(self, key: str) -> Iterator[Item]:
        return iter(self.hierarchy.children_of(key))


def build_hierarchy(items: Mapping[str, Item]) -> Hierarchy:
    """Build the hierarchy for an item table."""
    return Hierarchy(items)
