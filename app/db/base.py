"""
Storage interface for the rental ledger.

Documents are plain dicts keyed by an integer ``_id``. Filters are equality
matches on top-level fields; ``None`` matches a null or missing field.

Backends:
- MemoryStorage: transient in-process maps (default)
- MongoStorage: MongoDB via motor
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

Document = Dict[str, Any]


class DuplicateRecordError(Exception):
    """A write would break a unique field constraint."""

    def __init__(self, collection: str, field: str):
        super().__init__(f"Duplicate value for '{field}' in '{collection}'")
        self.collection = collection
        self.field = field


class Collection(ABC):
    """One keyed record collection."""

    name: str
    unique_fields: Sequence[str] = ()

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate the next id. Ids are never handed out twice."""

    @abstractmethod
    async def get(self, doc_id: int) -> Optional[Document]:
        ...

    @abstractmethod
    async def list(self, filter_dict: Optional[Document] = None) -> List[Document]:
        """Matching documents in ascending id order."""

    @abstractmethod
    async def count(self, filter_dict: Optional[Document] = None) -> int:
        ...

    @abstractmethod
    async def insert(self, doc: Document) -> Document:
        """Store a document that already carries its ``_id``."""

    @abstractmethod
    async def update(self, doc_id: int, fields: Document) -> Optional[Document]:
        """Set fields on a document and return it, or None if absent."""

    @abstractmethod
    async def update_where(self, doc_id: int, match: Document, fields: Document) -> Optional[Document]:
        """
        Conditional update: set fields only if the document also matches.

        Returns the updated document, or None if it is absent or did not match.
        The check and the write happen as one step.
        """

    @abstractmethod
    async def delete(self, doc_id: int) -> bool:
        ...


class Storage(ABC):
    """The three collections owned by the ledger."""

    users: Collection
    movies: Collection
    rentals: Collection

    async def connect(self) -> None:
        """Open connections and prepare indexes."""

    async def close(self) -> None:
        """Release connections."""
