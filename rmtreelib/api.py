"""High-level API for rmtreelib.

This module provides simple functions for the common cases: load a store
and get its hierarchy, print it, or link it onto disk. ``run`` drives a
whole pipeline from a RunConfig and is what the command line calls.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional, TextIO, Tuple, Union

from .caching import RecordCache
from .config import LoaderConfig, RunConfig
from .error_policies import ErrorPolicy, create_policy
from .errors import OutputNotFoundError
from .formatting import FormatConfig
from .hierarchy import Hierarchy, build_hierarchy
from .loader import load_items
from .materialize import FilesystemMaterializer, MaterializeReport
from .render import TreeRenderer


async def build_tree_async(source: Union[str, Path],
                           loader: Optional[LoaderConfig] = None,
                           cache: Optional[RecordCache] = None) -> Hierarchy:
    """Load a store and build its hierarchy.

    The hierarchy is only built once every record task has finished.

    Args:
        source: Record store directory
        loader: Loader configuration
        cache: Optional parsed-record cache

    Returns:
        Hierarchy over all non-deleted, readable records
    """
    items = await load_items(source, config=loader, cache=cache)
    return build_hierarchy(items)


def build_tree(source: Union[str, Path],
               loader: Optional[LoaderConfig] = None,
               cache: Optional[RecordCache] = None) -> Hierarchy:
    """Blocking version of build_tree_async."""
    return asyncio.run(build_tree_async(source, loader, cache))


def print_store(source: Union[str, Path],
                fmt: Optional[FormatConfig] = None,
                stream: Optional[TextIO] = None) -> Tuple[int, int]:
    """Print the tree for a store.

    Returns:
        (directory count, file count)
    """
    return TreeRenderer(build_tree(source), fmt, stream).render()


def link_store(source: Union[str, Path],
               output_root: Union[str, Path],
               policy: Optional[ErrorPolicy] = None,
               stream: Optional[TextIO] = None) -> MaterializeReport:
    """Materialize the tree for a store under ``output_root``.

    Raises:
        OutputNotFoundError: If ``output_root`` does not exist
    """
    if not Path(output_root).exists():
        raise OutputNotFoundError(output_root)
    return FilesystemMaterializer(build_tree(source), source, output_root, policy, stream).materialize()


def run(config: RunConfig,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None) -> int:
    """Run the whole pipeline described by ``config``.

    Setup problems (invalid config, missing paths, unlistable store) are
    reported to ``stderr`` and give exit status 1. Per-item materialization
    failures are reported but still give status 0, unless ``config.strict``
    is set, in which case the first one stops the run with status 1.

    Returns:
        Process exit status
    """
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    problems = config.validate()
    if problems:
        for problem in problems:
            print(f"Error: {problem}", file=stderr)
        return 1

    missing = config.check_paths()
    if missing:
        print(f"Error: {missing}", file=stderr)
        return 1

    try:
        hierarchy = build_tree(config.source_path, config.loader)
    except OSError as e:
        print(f"Error loading items: {e}", file=stderr)
        return 1

    if not config.symlink:
        TreeRenderer(hierarchy, config.fmt, stdout, config.max_depth).render()
        return 0

    policy = create_policy(strict=config.strict, stream=stderr)

    materializer = FilesystemMaterializer(
        hierarchy,
        config.source_path,
        config.output_path,
        policy=policy,
        stream=stdout,
        max_depth=config.max_depth,
    )
    try:
        materializer.materialize()
    except OSError as e:
        print(f"Error: {e}", file=stderr)
        return 1
    return 0
