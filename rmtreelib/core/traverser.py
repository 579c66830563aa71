"""Depth-first traversal of the item hierarchy.

The traverser walks the children index through a TreeAdapter and yields
one TraversalStep per visited item, carrying everything a consumer needs
to draw branch prefixes or build relative paths without tracking state of
its own.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

from .adapter import TreeAdapter
from .item import Item, MAX_DEPTH, ROOT_KEY


@dataclass(frozen=True)
class TraversalStep:
    """One visited item and its position in the walk.

    Attributes:
        item: The visited item
        depth: Distance from the top-level bucket (top-level items = 0)
        is_last: Whether this is the final child of its parent
        ancestors_last: ``is_last`` flag of every ancestor, outermost first
        path_parts: Trimmed names of every ancestor, outermost first
    """

    item: Item
    depth: int
    is_last: bool
    ancestors_last: Tuple[bool, ...] = ()
    path_parts: Tuple[str, ...] = ()


class DepthFirstPreOrderTraverser:
    """Depth-first pre-order traversal with a hard depth bound.

    Visits parent before children, children in sibling order. Items deeper
    than ``max_depth`` are silently skipped along with their subtrees. No
    visited set is kept: the depth bound is what stops a cyclic chain.
    """

    def __init__(self, adapter: TreeAdapter, max_depth: int = MAX_DEPTH):
        """Initialize traverser with an adapter.

        Args:
            adapter: TreeAdapter for navigating the hierarchy
            max_depth: Deepest depth that is still visited
        """
        self.adapter = adapter
        self.max_depth = max_depth

    def traverse(self,
                 key: str = ROOT_KEY,
                 start_depth: int = 0,
                 last_override: Optional[bool] = None,
                 recurse: bool = True,
                 descend: Optional[Callable[[Item], bool]] = None) -> Iterator[TraversalStep]:
        """Walk everything filed under ``key``.

        Args:
            key: Parent key whose children start the walk
            start_depth: Depth assigned to the children of ``key``
            last_override: If given, the final child of ``key`` uses this
                as its ``is_last`` flag (the root bucket is followed by the
                trash entry, so its last item is not drawn as last)
            recurse: If False, only the direct children are yielded
            descend: Optional predicate asked after an item has been
                yielded (and handled by the consumer); returning False
                prunes that item's subtree

        Yields:
            TraversalStep for every visited item
        """
        children = list(self.adapter.get_children(key))
        for index, child in enumerate(children):
            is_last = index == len(children) - 1
            if is_last and last_override is not None:
                is_last = last_override
            if recurse:
                yield from self._visit(child, start_depth, is_last, (), (), descend)
            elif start_depth <= self.max_depth:
                yield TraversalStep(child, start_depth, is_last)

    def _visit(self,
               item: Item,
               depth: int,
               is_last: bool,
               ancestors_last: Tuple[bool, ...],
               path_parts: Tuple[str, ...],
               descend: Optional[Callable[[Item], bool]]) -> Iterator[TraversalStep]:
        if depth > self.max_depth:
            return

        # Yield parent first (pre-order)
        yield TraversalStep(item, depth, is_last, ancestors_last, path_parts)

        if descend is not None and not descend(item):
            return

        children = list(self.adapter.get_children(item.id))
        child_ancestors = ancestors_last + (is_last,)
        child_parts = path_parts + (item.name.strip(" "),)
        for index, child in enumerate(children):
            yield from self._visit(
                child,
                depth + 1,
                index == len(children) - 1,
                child_ancestors,
                child_parts,
                descend,
            )
