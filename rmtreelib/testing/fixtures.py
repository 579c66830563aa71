"""Test fixtures for rmtreelib consumers.

These fixtures write small synthetic record stores to disk, so tests can
exercise the real loader instead of hand-building item tables.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.item import DOCUMENT_TAG, FOLDER_TAG


class StoreBuilder:
    """Public test fixture for building a record store.

    Example:
        store = StoreBuilder(tmp_path)
        store.add_folder("f1", "Books")
        store.add_document("d1", "Dune", parent="f1", subtype="epub")
        store.build()

        items = load_items_sync(store.path)
        assert items["d1"].parent_id == "f1"
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize with the directory the store will be written to.

        Args:
            path: Store directory (created by build() if missing)
        """
        self.path = Path(path)
        self._records: Dict[str, Union[Dict[str, Any], str]] = {}
        self._content: Dict[str, List[str]] = {}

    def add_folder(self, item_id: str, name: Optional[str], parent: str = "",
                   deleted: bool = False) -> 'StoreBuilder':
        """Add a folder (collection) record."""
        self._records[item_id] = self._record(name, FOLDER_TAG, parent, deleted)
        return self

    def add_document(self, item_id: str, name: Optional[str], parent: str = "",
                     subtype: str = "notebook", deleted: bool = False) -> 'StoreBuilder':
        """Add a document record and, for pdf/epub, its content file.

        Args:
            item_id: Record ID (file stem)
            name: Visible name, None to leave it out of the record
            parent: Parent ID, "" for top level, "trash" for trashed
            subtype: "pdf", "epub" or "notebook"
            deleted: Mark the record deleted
        """
        self._records[item_id] = self._record(name, DOCUMENT_TAG, parent, deleted)
        if subtype in ("pdf", "epub"):
            self._content.setdefault(item_id, []).append(subtype)
        return self

    def add_content(self, item_id: str, extension: str) -> 'StoreBuilder':
        """Add a bare content file with no change to the record."""
        self._content.setdefault(item_id, []).append(extension)
        return self

    def add_raw(self, item_id: str, text: str) -> 'StoreBuilder':
        """Add a record with arbitrary (possibly broken) contents."""
        self._records[item_id] = text
        return self

    @staticmethod
    def _record(name, tag, parent, deleted) -> Dict[str, Any]:
        record: Dict[str, Any] = {'type': tag, 'parent': parent, 'deleted': deleted}
        if name is not None:
            record['visibleName'] = name
        return record

    def build(self) -> Path:
        """Write every record and content file.

        Returns:
            The store directory
        """
        self.path.mkdir(parents=True, exist_ok=True)
        for item_id, record in self._records.items():
            text = record if isinstance(record, str) else json.dumps(record)
            (self.path / f"{item_id}.metadata").write_text(text, encoding="utf-8")
        for item_id, extensions in self._content.items():
            for extension in extensions:
                (self.path / f"{item_id}.{extension}").write_bytes(b"%content%")
        return self.path
