"""TreeAdapter abstraction for rmtreelib.

The adapter provides the navigation logic for the hierarchy, keeping the
items themselves free of parent/child references. Traversers only talk to
the tree through an adapter.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from .item import Item


class TreeAdapter(ABC):
    """Abstract adapter for navigating the item hierarchy.

    Children are looked up by parent key rather than by item, because the
    two synthetic top-level buckets ("root" and "trash") have no item of
    their own.
    """

    @abstractmethod
    def get_children(self, key: str) -> Iterator[Item]:
        """Get an iterator of the ordered children filed under ``key``.

        Args:
            key: Parent key (an item ID, "root" or "trash")

        Returns:
            Iterator yielding child Items in sibling order
        """
        pass
