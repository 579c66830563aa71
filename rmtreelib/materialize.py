"""Filesystem materialization.

Mirrors the hierarchy onto disk: every folder becomes a real directory,
every PDF or EPUB document becomes a symbolic link to its content file in
the store. Notebooks have no single content file and are skipped. Trashed
items are never materialized.

Writes are not transactional. A failed item is reported and the walk goes
on; re-running is the recovery path, which works because directory creation
and link replacement are both idempotent.
"""

import os
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, TextIO, Union

from .core.item import Item, MAX_DEPTH, ROOT_KEY
from .core.traverser import DepthFirstPreOrderTraverser, TraversalStep
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from .errors import (
    DestinationMissingError,
    DirectoryCreateError,
    MaterializeError,
    NotASymlinkError,
    SymlinkError,
)
from .formatting import format_summary
from .hierarchy import Hierarchy, HierarchyAdapter, build_hierarchy


def create_or_replace_symlink(target: Union[str, Path], link_path: Union[str, Path]) -> None:
    """Create a symlink, replacing an existing symlink at ``link_path``.

    A regular file or directory at ``link_path`` is never removed.

    Raises:
        NotASymlinkError: If a non-symlink entry is in the way
        OSError: If removing the old link or creating the new one fails
    """
    try:
        st = os.lstat(link_path)
    except FileNotFoundError:
        pass
    else:
        if not stat.S_ISLNK(st.st_mode):
            raise NotASymlinkError(link_path)
        os.remove(link_path)
    os.symlink(target, link_path)


def link_file_name(item: Item) -> str:
    """File name for a document's link: trimmed, no separators, with extension."""
    name = item.name.strip(" ").replace(os.sep, "_")
    extension = item.doc_subtype.extension
    if not name.endswith(extension):
        name += extension
    return name


@dataclass
class MaterializeReport:
    """What a materialization run did."""

    directories: List[Path] = field(default_factory=list)
    links: List[Path] = field(default_factory=list)
    skipped: List[Item] = field(default_factory=list)
    failures: List[MaterializeError] = field(default_factory=list)
    dir_count: int = 0
    file_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures


class FilesystemMaterializer:
    """Builds a directory/symlink tree for a Hierarchy."""

    def __init__(self,
                 hierarchy: Hierarchy,
                 source: Union[str, Path],
                 output_root: Union[str, Path],
                 policy: Optional[ErrorPolicy] = None,
                 stream: Optional[TextIO] = None,
                 max_depth: int = MAX_DEPTH):
        """Initialize the materializer.

        Args:
            hierarchy: Built hierarchy to mirror
            source: Record store directory holding the content files; links
                point at it by absolute path
            output_root: Existing directory to build the tree in
            policy: Where per-item failures go (report and continue by default)
            stream: Output stream for the summary (defaults to sys.stdout)
            max_depth: Deepest depth that is still materialized
        """
        self.hierarchy = hierarchy
        self.source = Path(source).absolute()
        self.output_root = Path(output_root)
        self.policy = policy or ContinueOnErrorsPolicy(verbose=True)
        self.stream = stream
        self.traverser = DepthFirstPreOrderTraverser(HierarchyAdapter(hierarchy), max_depth)
        self.report = MaterializeReport()

    def materialize(self) -> MaterializeReport:
        """Walk the root bucket and write every item, then print the summary."""
        self.report = MaterializeReport()

        for step in self.traverser.traverse(ROOT_KEY, descend=self._descend):
            try:
                self._materialize_step(step)
            except MaterializeError as e:
                self.report.failures.append(e)
                self.policy.handle_sync(e, 'link_item', step.item)

        dir_count, file_count = self.hierarchy.count_kinds()
        self.report.dir_count = dir_count
        self.report.file_count = file_count

        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(format_summary(dir_count, file_count) + "\n")
        return self.report

    @staticmethod
    def _descend(item: Item) -> bool:
        # Notebooks are skipped outright, subtree included
        return item.is_folder or (item.doc_subtype is not None and item.doc_subtype.linkable)

    def _relative_dir(self, step: TraversalStep) -> Path:
        return self.output_root.joinpath(*step.path_parts)

    def _materialize_step(self, step: TraversalStep) -> None:
        item = step.item
        if item.is_folder:
            self._make_directory(self._relative_dir(step) / item.name.strip(" "))
        elif item.doc_subtype is not None and item.doc_subtype.linkable:
            self._make_link(item, self._relative_dir(step))
        else:
            self.report.skipped.append(item)

    def _make_directory(self, dir_path: Path) -> None:
        try:
            os.makedirs(dir_path, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(dir_path, e) from e
        self.report.directories.append(dir_path)

    def _make_link(self, item: Item, dest_dir: Path) -> None:
        src_path = self.source / f"{item.id}{item.doc_subtype.extension}"

        if not dest_dir.is_dir():
            raise DestinationMissingError(dest_dir)

        dest_path = dest_dir / link_file_name(item)
        try:
            create_or_replace_symlink(src_path, dest_path)
        except OSError as e:
            raise SymlinkError(src_path, dest_path, e) from e
        self.report.links.append(dest_path)


def link_tree(items: Mapping[str, Item],
              source: Union[str, Path],
              output_root: Union[str, Path],
              policy: Optional[ErrorPolicy] = None,
              stream: Optional[TextIO] = None,
              max_depth: int = MAX_DEPTH) -> MaterializeReport:
    """Build the hierarchy for ``items`` and materialize it under ``output_root``."""
    materializer = FilesystemMaterializer(
        build_hierarchy(items), source, output_root, policy, stream, max_depth
    )
    return materializer.materialize()
