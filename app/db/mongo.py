import logging
from datetime import date, datetime, time
from typing import List, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.db.base import Collection, Document, DuplicateRecordError, Storage

logger = logging.getLogger(__name__)


def _encode(fields: Document) -> Document:
    """BSON has no date type; store calendar dates as midnight datetimes."""
    return {
        key: datetime.combine(value, time()) if isinstance(value, date) and not isinstance(value, datetime) else value
        for key, value in fields.items()
    }


class MongoCollection(Collection):
    """Collection backed by a MongoDB collection with integer ``_id`` values."""

    def __init__(self, db: AsyncIOMotorDatabase, name: str, unique_fields: Sequence[str] = ()):
        self.db = db
        self.name = name
        self.unique_fields = tuple(unique_fields)
        self.collection: AsyncIOMotorCollection = db[name]
        self.counters: AsyncIOMotorCollection = db["counters"]

    async def create_indexes(self):
        for field in self.unique_fields:
            await self.collection.create_index(field, unique=True)

    async def next_id(self) -> int:
        counter = await self.counters.find_one_and_update(
            {"_id": self.name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return counter["seq"]

    async def get(self, doc_id: int) -> Optional[Document]:
        return await self.collection.find_one({"_id": doc_id})

    async def list(self, filter_dict: Optional[Document] = None) -> List[Document]:
        cursor = self.collection.find(_encode(filter_dict or {})).sort("_id", 1)
        return await cursor.to_list(None)

    async def count(self, filter_dict: Optional[Document] = None) -> int:
        return await self.collection.count_documents(_encode(filter_dict or {}))

    async def insert(self, doc: Document) -> Document:
        try:
            await self.collection.insert_one(_encode(doc))
        except DuplicateKeyError as exc:
            raise DuplicateRecordError(self.name, self._duplicate_field(exc)) from exc
        return dict(doc)

    async def update(self, doc_id: int, fields: Document) -> Optional[Document]:
        return await self.update_where(doc_id, {}, fields)

    async def update_where(self, doc_id: int, match: Document, fields: Document) -> Optional[Document]:
        try:
            return await self.collection.find_one_and_update(
                {"_id": doc_id, **_encode(match)},
                {"$set": _encode(fields)},
                return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError as exc:
            raise DuplicateRecordError(self.name, self._duplicate_field(exc)) from exc

    async def delete(self, doc_id: int) -> bool:
        result = await self.collection.delete_one({"_id": doc_id})
        return result.deleted_count > 0

    def _duplicate_field(self, exc: DuplicateKeyError) -> str:
        key_pattern = (exc.details or {}).get("keyPattern") or {}
        for field in key_pattern:
            return field
        return self.unique_fields[0] if self.unique_fields else "_id"


class MongoStorage(Storage):
    """MongoDB connection manager."""

    def __init__(self, url: str, database_name: str):
        self.url = url
        self.database_name = database_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """Connect to MongoDB."""
        self.client = AsyncIOMotorClient(self.url)
        self.db = self.client[self.database_name]
        self.users = MongoCollection(self.db, "users", unique_fields=("email",))
        self.movies = MongoCollection(self.db, "movies")
        self.rentals = MongoCollection(self.db, "rentals")

        await self.create_indexes()
        logger.info("Connected to MongoDB: %s", self.database_name)

    async def close(self):
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    async def create_indexes(self):
        """Create database indexes."""
        # User email unique index
        await self.users.create_indexes()

        # Rental lookups by reference and open state
        await self.rentals.collection.create_index([("user_id", 1), ("returned_date", 1)])
        await self.rentals.collection.create_index([("movie_id", 1), ("returned_date", 1)])
