"""Textual tree rendering.

Draws the hierarchy the way ``tree`` draws a directory: one line per item
in depth-first pre-order, branch glyphs for structure, and a summary line.
Trashed items are listed under a synthetic "Trash" folder after every real
top-level item, one level deep and without recursing into them.
"""

import sys
from typing import Mapping, Optional, TextIO, Tuple

from .core.item import Item, MAX_DEPTH, ROOT_KEY, TRASH_KEY
from .core.traverser import DepthFirstPreOrderTraverser, TraversalStep
from .formatting import (
    FormatConfig,
    branch_prefix,
    format_line,
    format_summary,
    format_trash_line,
)
from .hierarchy import Hierarchy, HierarchyAdapter, build_hierarchy


class TreeRenderer:
    """Writes a Hierarchy as an indented tree listing."""

    def __init__(self,
                 hierarchy: Hierarchy,
                 fmt: Optional[FormatConfig] = None,
                 stream: Optional[TextIO] = None,
                 max_depth: int = MAX_DEPTH):
        """Initialize the renderer.

        Args:
            hierarchy: Built hierarchy to draw
            fmt: Decorations to apply (color on, everything else off by default)
            stream: Output stream (defaults to sys.stdout at render time)
            max_depth: Deepest depth that is still drawn
        """
        self.hierarchy = hierarchy
        self.fmt = fmt or FormatConfig()
        self.stream = stream
        self.traverser = DepthFirstPreOrderTraverser(HierarchyAdapter(hierarchy), max_depth)

    def _write(self, line: str = "") -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(line + "\n")

    def _line(self, step: TraversalStep) -> str:
        return format_line(step.item, branch_prefix(step.ancestors_last), step.is_last, self.fmt)

    def render(self) -> Tuple[int, int]:
        """Write the tree and summary.

        Returns:
            (directory count, file count) as printed in the summary
        """
        has_trash = bool(self.hierarchy.trash)

        self._write(".")

        # The last root is only drawn as last when no trash entry follows it
        for step in self.traverser.traverse(ROOT_KEY, last_override=False if has_trash else None):
            self._write(self._line(step))

        if has_trash:
            self._write(format_trash_line(self.fmt))
            for step in self.traverser.traverse(TRASH_KEY, start_depth=1, recurse=False):
                self._write(format_line(step.item, branch_prefix((True,)), step.is_last, self.fmt))

        dir_count, file_count = self.hierarchy.count_kinds()
        self._write()
        self._write(format_summary(dir_count, file_count))
        return dir_count, file_count


def print_tree(items: Mapping[str, Item],
               fmt: Optional[FormatConfig] = None,
               stream: Optional[TextIO] = None,
               max_depth: int = MAX_DEPTH) -> Tuple[int, int]:
    """Build the hierarchy for ``items`` and render it."""
    return TreeRenderer(build_hierarchy(items), fmt, stream, max_depth).render()
