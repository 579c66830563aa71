"""Exception types raised by rmtreelib."""

from pathlib import Path
from typing import Optional, Union


class RmTreeError(Exception):
    """Base class for all rmtreelib errors."""


class SourceNotFoundError(RmTreeError, FileNotFoundError):
    """The source store directory does not exist or cannot be listed."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Path '{path}' does not exist")


class OutputNotFoundError(RmTreeError, FileNotFoundError):
    """The materialization output root does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Output Path '{path}' does not exist")


class RecordParseError(RmTreeError, ValueError):
    """A metadata record could not be decoded into an item."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot parse record '{path}': {reason}")


class MaterializeError(RmTreeError, OSError):
    """A single item could not be written to the output tree.

    Attributes:
        path: Filesystem path the failed operation targeted
        cause: Underlying OS error, if any
    """

    def __init__(self, message: str, path: Union[str, Path], cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class DirectoryCreateError(MaterializeError):
    def __init__(self, path: Union[str, Path], cause: BaseException):
        super().__init__(f"Error creating directory '{path}': {cause}", path, cause)


class DestinationMissingError(MaterializeError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Path '{path}' does not exist", path)


class SymlinkError(MaterializeError):
    """Creating or replacing a symbolic link failed."""

    def __init__(self, target: Union[str, Path], path: Union[str, Path], cause: BaseException):
        self.target = Path(target)
        super().__init__(
            f"Error creating symlink from '{target}' to '{path}': {cause}", path, cause
        )


class NotASymlinkError(RmTreeError, FileExistsError):
    """A real file or directory sits where a symlink should go."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"path exists and is not a symlink: {path}")
