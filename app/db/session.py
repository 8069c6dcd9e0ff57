from app.core.config import Settings
from app.db.base import Storage
from app.db.memory import MemoryStorage
from app.db.mongo import MongoStorage


def build_storage(settings: Settings) -> Storage:
    """Construct the storage backend named in settings."""
    if settings.STORAGE_BACKEND == "mongo":
        return MongoStorage(settings.MONGODB_URL, settings.DATABASE_NAME)
    return MemoryStorage()
