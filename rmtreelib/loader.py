"""Async record loader.

Reads a flat record store (one ``<id>.metadata`` JSON file per item, plus
``<id>.pdf`` / ``<id>.epub`` content files) into an item table keyed by ID.
Every record is processed by its own task; file I/O runs in worker threads
and results are inserted into one shared table under a lock. The gather at
the end is the join barrier: nothing downstream sees a partial table.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple, Union

from .caching import RecordCache
from .config import LoaderConfig
from .core.item import Item
from .error_policies import CollectErrorsPolicy, ErrorPolicy
from .errors import RecordParseError, SourceNotFoundError


# Record fields and the JSON types they may hold (None = missing/null)
_FIELD_TYPES = {
    'visibleName': str,
    'type': str,
    'parent': str,
    'deleted': bool,
}


class StoreListing(NamedTuple):
    """What a single scan of the store directory turned up."""
    metadata_files: List[Path]
    pdf_ids: FrozenSet[str]
    epub_ids: FrozenSet[str]


def scan_store(source: Union[str, Path], config: Optional[LoaderConfig] = None) -> StoreListing:
    """List metadata records and content files in one directory pass.

    Args:
        source: Record store directory
        config: Loader configuration (for the file extensions)

    Returns:
        StoreListing with record paths sorted by name and the content ID sets

    Raises:
        SourceNotFoundError: If the directory does not exist
        OSError: If it exists but cannot be listed
    """
    config = config or LoaderConfig()
    source = Path(source)

    metadata_files = []
    pdf_ids = set()
    epub_ids = set()

    try:
        with os.scandir(source) as iterator:
            for entry in iterator:
                stem, ext = os.path.splitext(entry.name)
                if ext == config.metadata_ext:
                    metadata_files.append(Path(entry.path))
                elif ext == config.pdf_ext:
                    pdf_ids.add(stem)
                elif ext == config.epub_ext:
                    epub_ids.add(stem)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise SourceNotFoundError(source) from e

    metadata_files.sort()
    return StoreListing(metadata_files, frozenset(pdf_ids), frozenset(epub_ids))


def parse_record(path: Union[str, Path], data: bytes) -> Dict[str, Any]:
    """Decode one metadata record.

    A record must be a JSON object (or ``null``, read as an empty record)
    whose known fields have the expected types; unknown fields are ignored.
    Invalid UTF-8 is replaced with U+FFFD rather than rejected.

    Raises:
        RecordParseError: If the record is not usable
    """
    try:
        record = json.loads(data.decode('utf-8', errors='replace'))
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting too deep for the decoder
        raise RecordParseError(path, str(e) or type(e).__name__) from e

    if record is None:
        record = {}

    if not isinstance(record, dict):
        raise RecordParseError(path, f"expected an object, got {type(record).__name__}")

    for name, expected in _FIELD_TYPES.items():
        value = record.get(name)
        if value is not None and not isinstance(value, expected):
            raise RecordParseError(
                path, f"field '{name}' should be {expected.__name__}, got {type(value).__name__}"
            )

    return record


def _read_record(path: Path) -> Tuple[bytes, os.stat_result]:
    """Blocking read, run in a worker thread."""
    with open(path, 'rb') as f:
        stat_result = os.fstat(f.fileno())
        return f.read(), stat_result


class RecordLoader:
    """Loads a record store into an item table.

    Example:
        loader = RecordLoader("/path/to/xochitl")
        items = await loader.load()
    """

    def __init__(self,
                 source: Union[str, Path],
                 config: Optional[LoaderConfig] = None,
                 policy: Optional[ErrorPolicy] = None,
                 cache: Optional[RecordCache] = None):
        """Initialize the loader.

        Args:
            source: Record store directory
            config: Loader configuration
            policy: Where per-record failures go (silent collection by default)
            cache: Optional parsed-record cache shared across loads
        """
        self.source = Path(source)
        self.config = config or LoaderConfig()
        self.policy = policy or CollectErrorsPolicy()
        self.cache = cache
        if self.cache is None and self.config.use_cache:
            self.cache = RecordCache(self.config.cache_size, self.config.cache_ttl)

        self.items: Dict[str, Item] = {}
        self._lock = asyncio.Lock()
        self._semaphore = asyncio.Semaphore(self.config.max_concurrent)

        # Statistics
        self.records_seen = 0
        self.records_deleted = 0
        self.records_failed = 0

    async def load(self) -> Dict[str, Item]:
        """Read every record and return the item table.

        Raises:
            SourceNotFoundError: If the store directory does not exist
        """
        listing = await asyncio.to_thread(scan_store, self.source, self.config)
        self.records_seen = len(listing.metadata_files)

        tasks = [
            self._load_one(path, listing.pdf_ids, listing.epub_ids)
            for path in listing.metadata_files
        ]
        await asyncio.gather(*tasks)

        return self.items

    async def _load_one(self, path: Path, pdf_ids: FrozenSet[str], epub_ids: FrozenSet[str]) -> None:
        item_id = path.name[:-len(self.config.metadata_ext)]

        async with self._semaphore:
            try:
                record = await self._get_record(path)
            except (OSError, RecordParseError) as e:
                self.records_failed += 1
                await self.policy.handle(e, 'load_record', path)
                return

        if record.get('deleted'):
            self.records_deleted += 1
            return

        item = Item.from_record(item_id, record, pdf_ids, epub_ids)

        async with self._lock:
            self.items[item_id] = item

    async def _get_record(self, path: Path) -> Dict[str, Any]:
        data, stat_result = await asyncio.to_thread(_read_record, path)

        if self.cache is None:
            return parse_record(path, data)

        key = RecordCache.make_key(path, stat_result)
        record = self.cache.get(key)
        if record is None:
            record = parse_record(path, data)
            self.cache.put(key, record)
        return record

    def get_stats(self) -> dict:
        stats = {
            'records_seen': self.records_seen,
            'records_loaded': len(self.items),
            'records_deleted': self.records_deleted,
            'records_failed': self.records_failed,
        }
        if self.cache is not None:
            stats['cache'] = self.cache.get_stats()
        return stats


async def load_items(source: Union[str, Path],
                     *,
                     config: Optional[LoaderConfig] = None,
                     policy: Optional[ErrorPolicy] = None,
                     cache: Optional[RecordCache] = None) -> Dict[str, Item]:
    """Load a record store into an item table.

    Args:
        source: Record store directory
        config: Loader configuration
        policy: Error policy for unreadable records
        cache: Optional parsed-record cache

    Returns:
        Dict mapping item ID to Item; deleted and unreadable records are absent
    """
    loader = RecordLoader(source, config=config, policy=policy, cache=cache)
    return await loader.load()


def load_items_sync(source: Union[str, Path], **kwargs) -> Dict[str, Item]:
    """Blocking wrapper around load_items for non-async callers."""
    return asyncio.run(load_items(source, **kwargs))
