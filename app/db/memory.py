from typing import Dict, List, Optional, Sequence

from app.db.base import Collection, Document, DuplicateRecordError, Storage


def _matches(doc: Document, filter_dict: Optional[Document]) -> bool:
    if not filter_dict:
        return True
    return all(doc.get(key) == value for key, value in filter_dict.items())


class MemoryCollection(Collection):
    """Dict-backed collection. Insertion order equals id order."""

    def __init__(self, name: str, unique_fields: Sequence[str] = ()):
        self.name = name
        self.unique_fields = tuple(unique_fields)
        self._docs: Dict[int, Document] = {}
        self._last_id = 0

    async def next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    async def get(self, doc_id: int) -> Optional[Document]:
        doc = self._docs.get(doc_id)
        return dict(doc) if doc is not None else None

    async def list(self, filter_dict: Optional[Document] = None) -> List[Document]:
        return [dict(doc) for doc in self._docs.values() if _matches(doc, filter_dict)]

    async def count(self, filter_dict: Optional[Document] = None) -> int:
        return sum(1 for doc in self._docs.values() if _matches(doc, filter_dict))

    async def insert(self, doc: Document) -> Document:
        self._check_unique(doc, doc["_id"])
        self._docs[doc["_id"]] = dict(doc)
        return dict(doc)

    async def update(self, doc_id: int, fields: Document) -> Optional[Document]:
        return await self.update_where(doc_id, {}, fields)

    async def update_where(self, doc_id: int, match: Document, fields: Document) -> Optional[Document]:
        doc = self._docs.get(doc_id)
        if doc is None or not _matches(doc, match):
            return None
        self._check_unique(fields, doc_id)
        doc.update(fields)
        return dict(doc)

    async def delete(self, doc_id: int) -> bool:
        return self._docs.pop(doc_id, None) is not None

    def _check_unique(self, fields: Document, doc_id: int) -> None:
        for field in self.unique_fields:
            if field not in fields:
                continue
            for other_id, other in self._docs.items():
                if other_id != doc_id and other.get(field) == fields[field]:
                    raise DuplicateRecordError(self.name, field)


class MemoryStorage(Storage):
    """Transient storage living for the lifetime of the process."""

    def __init__(self):
        self.users = MemoryCollection("users", unique_fields=("email",))
        self.movies = MemoryCollection("movies")
        self.rentals = MemoryCollection("rentals")
