from typing import List, Optional

from app.db.base import Collection
from app.models.movie import Movie, MovieCreate
from app.models.base import utcnow
from app.repositories.base import record_from_doc


class MovieRepository:
    """Movie storage operations."""

    def __init__(self, collection: Collection):
        self.collection = collection

    async def create_movie(self, movie_data: MovieCreate) -> Movie:
        """Create a new movie. New movies start available."""
        movie_dict = {
            "_id": await self.collection.next_id(),
            **movie_data.model_dump(),
            "available": True,
            "created_at": utcnow()
        }

        await self.collection.insert(movie_dict)
        return Movie(**record_from_doc(movie_dict))

    async def list_movies(self, available: Optional[bool] = None) -> List[Movie]:
        """List movies in id order, optionally by availability."""
        filter_dict = {"available": available} if available is not None else None
        docs = await self.collection.list(filter_dict)
        return [Movie(**record_from_doc(doc)) for doc in docs]

    async def get_movie(self, movie_id: int) -> Optional[Movie]:
        """Get a movie by id."""
        doc = await self.collection.get(movie_id)
        if doc:
            return Movie(**record_from_doc(doc))
        return None

    async def update_movie(self, movie_id: int, update_data: dict) -> Optional[Movie]:
        """Update a movie."""
        if not update_data:
            return await self.get_movie(movie_id)

        doc = await self.collection.update(movie_id, update_data)
        if doc:
            return Movie(**record_from_doc(doc))
        return None

    async def claim_movie(self, movie_id: int) -> Optional[Movie]:
        """Mark an available movie as rented. None if missing or already rented."""
        doc = await self.collection.update_where(movie_id, {"available": True}, {"available": False})
        if doc:
            return Movie(**record_from_doc(doc))
        return None

    async def release_movie(self, movie_id: int) -> Optional[Movie]:
        """Mark a movie as available again."""
        doc = await self.collection.update(movie_id, {"available": True})
        if doc:
            return Movie(**record_from_doc(doc))
        return None

    async def delete_movie(self, movie_id: int) -> bool:
        """Delete a movie."""
        return await self.collection.delete(movie_id)

    async def count_available(self) -> int:
        return await self.collection.count({"available": True})
