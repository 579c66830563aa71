"""Core abstractions for rmtreelib.

This module contains the item model, the adapter interface used to
navigate the hierarchy, and the depth-bounded traverser.
"""

from .item import (
    Item,
    ItemKind,
    DocSubtype,
    make_sort_key,
    ROOT_KEY,
    TRASH_KEY,
    DEFAULT_NAME,
    MAX_DEPTH,
)
from .adapter import TreeAdapter
from .traverser import TraversalStep, DepthFirstPreOrderTraverser

__all__ = [
    "Item",
    "ItemKind",
    "DocSubtype",
    "make_sort_key",
    "ROOT_KEY",
    "TRASH_KEY",
    "DEFAULT_NAME",
    "MAX_DEPTH",
    "TreeAdapter",
    "TraversalStep",
    "DepthFirstPreOrderTraverser",
]
