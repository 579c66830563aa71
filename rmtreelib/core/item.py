"""Item model for rmtreelib.

An Item is one node of the reconstructed hierarchy. Items are plain data
containers; how they relate to each other lives in the Hierarchy index,
not in the items themselves.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


ROOT_KEY = "root"
TRASH_KEY = "trash"
DEFAULT_NAME = "Unnamed"
MAX_DEPTH = 50

FOLDER_TAG = "CollectionType"
DOCUMENT_TAG = "DocumentType"


class ItemKind(Enum):
    """Whether an item holds other items or content."""
    FOLDER = "folder"
    DOCUMENT = "document"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> 'ItemKind':
        """Map a source type tag to a kind.

        Anything that is not a collection is treated as a document,
        including an empty tag.
        """
        if tag == FOLDER_TAG:
            return cls.FOLDER
        return cls.DOCUMENT


class DocSubtype(Enum):
    """Content type of a document, named after its file extension."""
    PDF = "pdf"
    EPUB = "epub"
    NOTEBOOK = "notebook"

    @property
    def extension(self) -> str:
        return "." + self.value

    @property
    def linkable(self) -> bool:
        """Notebooks have no single exportable content file."""
        return self is not DocSubtype.NOTEBOOK


def make_sort_key(kind: ItemKind, name: str) -> Tuple[int, str]:
    """Folders (rank 0) before documents (rank 1), then by name."""
    return (0 if kind is ItemKind.FOLDER else 1, name)


@dataclass(frozen=True)
class Item:
    """One folder or document from the source store.

    Attributes:
        id: Opaque identifier, the record's file stem
        name: Display name
        kind: Folder or document
        parent_id: Containing folder ID, "" for top level, "trash" for trashed
        doc_subtype: Content type for documents, None for folders
    """

    id: str
    name: str = DEFAULT_NAME
    kind: ItemKind = ItemKind.DOCUMENT
    parent_id: str = ""
    doc_subtype: Optional[DocSubtype] = None
    sort_key: Tuple[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'sort_key', make_sort_key(self.kind, self.name))

    @property
    def is_folder(self) -> bool:
        return self.kind is ItemKind.FOLDER

    @property
    def parent_key(self) -> str:
        """Bucket this item is filed under in the children index."""
        return self.parent_id or ROOT_KEY

    @classmethod
    def from_record(cls,
                    item_id: str,
                    record: Dict[str, Any],
                    pdf_ids=frozenset(),
                    epub_ids=frozenset()) -> 'Item':
        """Build an Item from a parsed metadata record.

        Applies the placeholder name and default kind, then classifies the
        document subtype by checking EPUB presence before PDF presence.
        """
        name = record.get('visibleName') or DEFAULT_NAME
        kind = ItemKind.from_tag(record.get('type') or DOCUMENT_TAG)
        parent_id = record.get('parent') or ""

        subtype = None
        if kind is not ItemKind.FOLDER:
            if item_id in epub_ids:
                subtype = DocSubtype.EPUB
            elif item_id in pdf_ids:
                subtype = DocSubtype.PDF
            else:
                subtype = DocSubtype.NOTEBOOK

        return cls(
            id=item_id,
            name=str(name),
            kind=kind,
            parent_id=str(parent_id),
            doc_subtype=subtype,
        )
