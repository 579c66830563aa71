"""
Error handling policies for rmtreelib.

Loading and materialization both work item by item, and a failure on one
item must not take the whole run down. Instead of hard-coding what happens
on failure, each stage hands the error to a pluggable policy which decides
whether to stop, report, or just remember it.
"""

import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors that
    occur while reading records or writing the output tree.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    @abstractmethod
    def handle_sync(self, error: Exception, method_name: str, item: Any) -> None:
        """
        Handle an error that occurred while processing one item.

        Args:
            error: The exception that was raised
            method_name: Name of the operation that failed (e.g. 'link_item')
            item: The item or record path being processed

        Raises:
            The original error, if the policy decides to stop.
        """
        pass

    async def handle(self, error: Exception, method_name: str, item: Any) -> None:
        """
        Handle an error from async code.

        Policies never block, so the default just delegates to the sync
        handler.
        """
        self.handle_sync(error, method_name, item)

    def _record(self, error: Exception, method_name: str, item: Any) -> Dict[str, Any]:
        error_record = {
            'item': item,
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        self.errors.append(error_record)
        return error_record

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'errors': self.errors,
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the run.

    Useful when a partially built output tree is not acceptable.
    """

    def handle_sync(self, error: Exception, method_name: str, item: Any) -> None:
        """Record and re-raise the error immediately."""
        self._record(error, method_name, item)
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that reports errors and continues.

    Errors are collected for later inspection and, when verbose, written
    to stderr as they happen. This is the default for materialization.
    """

    def __init__(self, verbose: bool = True, stream=None):
        """
        Initialize the policy.

        Args:
            verbose: If True, print a warning to stderr for each error
            stream: Diagnostic stream (defaults to sys.stderr at call time)
        """
        super().__init__()
        self.verbose = verbose
        self.stream = stream

    def handle_sync(self, error: Exception, method_name: str, item: Any) -> None:
        self._record(error, method_name, item)

        if self.verbose:
            stream = self.stream if self.stream is not None else sys.stderr
            print(f"WARNING: {error}", file=stream)


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without printing anything.

    This is the default for loading: an unreadable record is simply left
    out of the item table, but the reason is still available afterwards.
    """

    def handle_sync(self, error: Exception, method_name: str, item: Any) -> None:
        """Silently collect the error."""
        self._record(error, method_name, item)


def create_policy(strict: bool = False, verbose: bool = True, stream=None) -> ErrorPolicy:
    """
    Convenience function to pick a materialization policy.

    Args:
        strict: If True, use FailFastPolicy; if False, use ContinueOnErrorsPolicy
        verbose: If True, print warnings for errors (only applies when strict=False)
        stream: Diagnostic stream for the warnings

    Returns:
        An ErrorPolicy configured appropriately
    """
    if strict:
        return FailFastPolicy()
    return ContinueOnErrorsPolicy(verbose=verbose, stream=stream)
