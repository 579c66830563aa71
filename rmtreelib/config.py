"""Configuration system for rmtreelib.

This module defines how callers describe a run: where the store lives,
how records are loaded, how the tree is decorated, and whether the result
is printed or linked onto disk.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .core.item import MAX_DEPTH
from .formatting import FormatConfig


DEFAULT_SOURCE_PATH = "/home/root/.local/share/remarkable/xochitl"
DEFAULT_OUTPUT_PATH = "."


class RunMode(Enum):
    """What to do with the reconstructed hierarchy."""
    PRINT = "print"          # Textual tree on stdout
    SYMLINK = "symlink"      # Directories and symlinks under the output path


@dataclass
class LoaderConfig:
    """Configuration for reading the record store."""

    max_concurrent: int = 100                 # Records read at the same time
    metadata_ext: str = ".metadata"
    pdf_ext: str = ".pdf"
    epub_ext: str = ".epub"

    # Parsed-record cache, only useful when one process loads repeatedly
    use_cache: bool = False
    cache_size: int = 10000
    cache_ttl: float = 300.0  # 5 minutes


@dataclass
class RunConfig:
    """Complete configuration for one run of the pipeline.

    This is the primary way callers specify what they want; the CLI builds
    one from its arguments.
    """

    source_path: Union[str, Path] = DEFAULT_SOURCE_PATH
    output_path: Union[str, Path] = DEFAULT_OUTPUT_PATH
    mode: RunMode = RunMode.PRINT

    fmt: FormatConfig = field(default_factory=FormatConfig)
    loader: LoaderConfig = field(default_factory=LoaderConfig)

    max_depth: int = MAX_DEPTH
    strict: bool = False  # Stop materializing at the first failure

    @property
    def symlink(self) -> bool:
        return self.mode is RunMode.SYMLINK

    @classmethod
    def for_symlinks(cls,
                     source_path: Union[str, Path],
                     output_path: Union[str, Path],
                     strict: bool = False) -> 'RunConfig':
        """Create config for materializing a store onto disk.

        Args:
            source_path: Record store directory
            output_path: Existing directory to build the tree in
            strict: Fail fast instead of reporting and continuing

        Returns:
            RunConfig in symlink mode
        """
        return cls(
            source_path=source_path,
            output_path=output_path,
            mode=RunMode.SYMLINK,
            strict=strict,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Only checks values; whether the paths exist is checked right before
        the pipeline starts.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_depth < 0:
            errors.append("max_depth cannot be negative")

        if self.loader.max_concurrent <= 0:
            errors.append("max_concurrent must be positive")

        if self.loader.use_cache:
            if self.loader.cache_size <= 0:
                errors.append("cache_size must be positive")
            if self.loader.cache_ttl <= 0:
                errors.append("cache_ttl must be positive")

        for name in ('metadata_ext', 'pdf_ext', 'epub_ext'):
            if not getattr(self.loader, name).startswith('.'):
                errors.append(f"{name} must start with '.'")

        return errors

    def check_paths(self) -> Optional[str]:
        """Check the pre-pipeline path requirements.

        Returns:
            Error message for the first missing path, or None
        """
        if not Path(self.source_path).exists():
            return f"Path '{self.source_path}' does not exist"
        if self.symlink and not Path(self.output_path).exists():
            return f"Output Path '{self.output_path}' does not exist"
        return None
