"""rmtreelib - Rebuild a flat reMarkable document store as a tree.

The store keeps one metadata record per document or folder, each pointing
at its parent by ID. rmtreelib loads those records concurrently, rebuilds
the parent -> children hierarchy, and either prints it like ``tree`` or
mirrors it onto disk as directories and symbolic links.

Typical use:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from rmtreelib import build_tree, TreeRenderer

    hierarchy = build_tree("/home/root/.local/share/remarkable/xochitl")
    TreeRenderer(hierarchy).render()
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.3.1"

from .core import (
    Item,
    ItemKind,
    DocSubtype,
    ROOT_KEY,
    TRASH_KEY,
    MAX_DEPTH,
    TraversalStep,
    DepthFirstPreOrderTraverser,
)
from .config import LoaderConfig, RunConfig, RunMode
from .formatting import FormatConfig, format_summary
from .caching import RecordCache
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    create_policy,
)
from .errors import (
    RmTreeError,
    SourceNotFoundError,
    OutputNotFoundError,
    RecordParseError,
    MaterializeError,
    DirectoryCreateError,
    DestinationMissingError,
    SymlinkError,
    NotASymlinkError,
)
from .loader import RecordLoader, load_items, load_items_sync
from .hierarchy import Hierarchy, HierarchyAdapter, build_hierarchy, build_children_map, sort_children
from .render import TreeRenderer, print_tree
from .materialize import (
    FilesystemMaterializer,
    MaterializeReport,
    create_or_replace_symlink,
    link_tree,
)
from .api import build_tree, build_tree_async, print_store, link_store, run

__all__ = [
    "__version__",
    # Model
    "Item",
    "ItemKind",
    "DocSubtype",
    "ROOT_KEY",
    "TRASH_KEY",
    "MAX_DEPTH",
    "TraversalStep",
    "DepthFirstPreOrderTraverser",
    # Config
    "LoaderConfig",
    "RunConfig",
    "RunMode",
    "FormatConfig",
    "format_summary",
    "RecordCache",
    # Errors
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "create_policy",
    "RmTreeError",
    "SourceNotFoundError",
    "OutputNotFoundError",
    "RecordParseError",
    "MaterializeError",
    "DirectoryCreateError",
    "DestinationMissingError",
    "SymlinkError",
    "NotASymlinkError",
    # Pipeline
    "RecordLoader",
    "load_items",
    "load_items_sync",
    "Hierarchy",
    "HierarchyAdapter",
    "build_hierarchy",
    "build_children_map",
    "sort_children",
    "TreeRenderer",
    "print_tree",
    "FilesystemMaterializer",
    "MaterializeReport",
    "create_or_replace_symlink",
    "link_tree",
    # API
    "build_tree",
    "build_tree_async",
    "print_store",
    "link_store",
    "run",
]
