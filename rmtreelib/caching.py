"""
Parsed-record cache for rmtreelib.

A process that loads the same store more than once (a long-lived service,
a test suite, a watch loop) would otherwise re-read and re-decode every
metadata record each time. The cache keys a parsed record by its path and
file identity (mtime and size), so an edited record is always re-parsed.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from cachetools import TTLCache


CacheKey = Tuple[str, int, int]


class RecordCache:
    """
    TTL-bounded cache of decoded metadata records.

    Example:
        cache = RecordCache(max_size=50000)
        items = await load_items(path, cache=cache)
        items = await load_items(path, cache=cache)  # served from cache
    """

    def __init__(self, max_size: int = 10000, ttl: float = 300.0):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of records held
            ttl: Time-to-live for entries in seconds
        """
        self._cache = TTLCache(maxsize=max_size, ttl=ttl)

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    @staticmethod
    def make_key(path: Union[str, Path], stat_result: os.stat_result) -> CacheKey:
        return (str(path), stat_result.st_mtime_ns, stat_result.st_size)

    def get(self, key: CacheKey) -> Optional[Dict[str, Any]]:
        """Return the cached record, counting the hit or miss."""
        record = self._cache.get(key)
        if record is None:
            self.cache_misses += 1
        else:
            self.cache_hits += 1
        return record

    def put(self, key: CacheKey, record: Dict[str, Any]) -> None:
        self._cache[key] = record

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> dict:
        total = self.cache_hits + self.cache_misses
        return {
            'size': len(self._cache),
            'max_size': self._cache.maxsize,
            'hits': self.cache_hits,
            'misses': self.cache_misses,
            'hit_rate': self.cache_hits / total if total else 0.0,
        }
