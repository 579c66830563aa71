"""Testing utilities for rmtreelib consumers."""

from .fixtures import StoreBuilder

__all__ = ['StoreBuilder']
