"""
RentalLedger - Users, movies and rentals, and the rules that keep them consistent.

Rules:
- A movie is available iff no open rental references it
- A user or movie with an open rental cannot be deleted
- Deleting a user or movie also removes its returned rentals, so every stored
  rental always resolves to an existing user and movie
- Rentals are enriched with their user and movie at read time

Every mutation runs under one lock. Claiming a movie for a new rental is a
single conditional update, so two rentals can never hold the same movie.
"""

import asyncio
import logging
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional

from app.db.base import DuplicateRecordError, Storage
from app.models.movie import Movie, MovieCreate, MovieUpdate
from app.models.rental import Rental, RentalCreate, RentalStatus, RentalWithDetails
from app.models.user import User, UserCreate, UserUpdate
from app.repositories.movie_repo import MovieRepository
from app.repositories.rental_repo import RentalRepository
from app.repositories.user_repo import UserRepository
from app.schemas.stats import StatsResponse
from app.utils.ledger_errors import (
    DuplicateEmailError,
    LedgerIntegrityError,
    MovieUnavailableError,
    ReferenceNotFoundError,
)

logger = logging.getLogger(__name__)


class DeleteOutcome(str, Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    HAS_OPEN_RENTALS = "has_open_rentals"


def _matches_search(term: Optional[str], values: Iterable[Optional[str]]) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in value.lower() for value in values if value)


class RentalLedger:
    def __init__(self, storage: Storage):
        self.storage = storage
        self.users = UserRepository(storage.users)
        self.movies = MovieRepository(storage.movies)
        self.rentals = RentalRepository(storage.rentals)
        self._lock = asyncio.Lock()

    # Users

    async def list_users(self, search: Optional[str] = None) -> List[User]:
        users = await self.users.list_users()
        return [u for u in users if _matches_search(search, (u.name, u.email, u.phone))]

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.users.get_user_by_id(user_id)

    async def create_user(self, user_in: UserCreate) -> User:
        async with self._lock:
            try:
                return await self.users.create_user(user_in)
            except DuplicateRecordError as exc:
                raise DuplicateEmailError(user_in.email) from exc

    async def update_user(self, user_id: int, user_in: UserUpdate) -> Optional[User]:
        updates = user_in.model_dump(exclude_unset=True)
        async with self._lock:
            try:
                return await self.users.update_user(user_id, updates)
            except DuplicateRecordError as exc:
                raise DuplicateEmailError(updates.get("email", "")) from exc

    async def delete_user(self, user_id: int) -> DeleteOutcome:
        async with self._lock:
            if await self.users.get_user_by_id(user_id) is None:
                return DeleteOutcome.NOT_FOUND
            if await self.rentals.count_open(user_id=user_id):
                logger.warning("Refusing to delete user %s with open rentals", user_id)
                return DeleteOutcome.HAS_OPEN_RENTALS

            await self._delete_rental_history(await self.rentals.list_rentals(user_id=user_id))
            await self.users.delete_user(user_id)
            logger.info("Deleted user %s", user_id)
            return DeleteOutcome.DELETED

    # Movies

    async def list_movies(self, search: Optional[str] = None, available: Optional[bool] = None) -> List[Movie]:
        movies = await self.movies.list_movies(available=available)
        return [m for m in movies if _matches_search(search, (m.title, m.director, m.genre))]

    async def get_movie(self, movie_id: int) -> Optional[Movie]:
        return await self.movies.get_movie(movie_id)

    async def create_movie(self, movie_in: MovieCreate) -> Movie:
        async with self._lock:
            return await self.movies.create_movie(movie_in)

    async def update_movie(self, movie_id: int, movie_in: MovieUpdate) -> Optional[Movie]:
        async with self._lock:
            return await self.movies.update_movie(movie_id, movie_in.model_dump(exclude_unset=True))

    async def delete_movie(self, movie_id: int) -> DeleteOutcome:
        async with self._lock:
            if await self.movies.get_movie(movie_id) is None:
                return DeleteOutcome.NOT_FOUND
            if await self.rentals.count_open(movie_id=movie_id):
                logger.warning("Refusing to delete movie %s with open rentals", movie_id)
                return DeleteOutcome.HAS_OPEN_RENTALS

            await self._delete_rental_history(await self.rentals.list_rentals(movie_id=movie_id))
            await self.movies.delete_movie(movie_id)
            logger.info("Deleted movie %s", movie_id)
            return DeleteOutcome.DELETED

    # Rentals

    async def list_rentals(self, status: Optional[RentalStatus] = None) -> List[RentalWithDetails]:
        rentals = await self._enrich_all(await self.rentals.list_rentals())
        if status is not None:
            rentals = [r for r in rentals if r.status == status]
        return rentals

    async def get_rental(self, rental_id: int) -> Optional[RentalWithDetails]:
        rental = await self.rentals.get_rental(rental_id)
        if rental is None:
            return None
        return await self._enrich(rental)

    async def list_rentals_by_user(self, user_id: int) -> List[RentalWithDetails]:
        return await self._enrich_all(await self.rentals.list_rentals(user_id=user_id))

    async def list_rentals_by_movie(self, movie_id: int) -> List[RentalWithDetails]:
        return await self._enrich_all(await self.rentals.list_rentals(movie_id=movie_id))

    async def create_rental(self, rental_in: RentalCreate) -> RentalWithDetails:
        """
        Open a rental and take the movie off the shelf.

        Raises ReferenceNotFoundError if the user or movie is missing and
        MovieUnavailableError if the movie is already rented. Nothing is
        written in either case.
        """
        async with self._lock:
            if await self.users.get_user_by_id(rental_in.user_id) is None:
                raise ReferenceNotFoundError("User", rental_in.user_id)
            if await self.movies.get_movie(rental_in.movie_id) is None:
                raise ReferenceNotFoundError("Movie", rental_in.movie_id)

            if await self.movies.claim_movie(rental_in.movie_id) is None:
                raise MovieUnavailableError(rental_in.movie_id)
            try:
                rental = await self.rentals.create_rental(rental_in)
            except Exception:
                await self.movies.release_movie(rental_in.movie_id)
                raise

            logger.info("Rental %s opened: user %s, movie %s", rental.id, rental.user_id, rental.movie_id)
            return await self._enrich(rental)

    async def return_rental(self, rental_id: int, returned_date: Optional[date] = None) -> Optional[RentalWithDetails]:
        """
        Close a rental and put the movie back on the shelf.

        Returning an already-returned rental only corrects its date.
        """
        async with self._lock:
            rental = await self.rentals.get_rental(rental_id)
            if rental is None:
                return None

            updated = await self.rentals.mark_returned(rental_id, returned_date or date.today())
            if rental.is_open:
                await self.movies.release_movie(rental.movie_id)
                logger.info("Rental %s returned", rental_id)
            else:
                logger.info("Rental %s return date corrected", rental_id)
            return await self._enrich(updated)

    async def delete_rental(self, rental_id: int) -> bool:
        async with self._lock:
            rental = await self.rentals.get_rental(rental_id)
            if rental is None:
                return False

            deleted = await self.rentals.delete_rental(rental_id)
            if deleted and rental.is_open:
                await self.movies.release_movie(rental.movie_id)
            logger.info("Rental %s deleted", rental_id)
            return deleted

    # Stats

    async def stats(self) -> StatsResponse:
        return StatsResponse(
            active_rentals=await self.rentals.count_open(),
            available_movies=await self.movies.count_available(),
            registered_users=await self.users.count_users()
        )

    # Helpers

    async def _delete_rental_history(self, rentals: List[Rental]) -> None:
        for rental in rentals:
            await self.rentals.delete_rental(rental.id)

    async def _enrich(self, rental: Rental) -> RentalWithDetails:
        return (await self._enrich_all([rental]))[0]

    async def _enrich_all(self, rentals: List[Rental]) -> List[RentalWithDetails]:
        users: Dict[int, Optional[User]] = {}
        movies: Dict[int, Optional[Movie]] = {}
        enriched = []

        for rental in rentals:
            if rental.user_id not in users:
                users[rental.user_id] = await self.users.get_user_by_id(rental.user_id)
            if rental.movie_id not in movies:
                movies[rental.movie_id] = await self.movies.get_movie(rental.movie_id)

            user = users[rental.user_id]
            movie = movies[rental.movie_id]
            if user is None or movie is None:
                logger.error("Rental %s references a missing user or movie", rental.id)
                raise LedgerIntegrityError(f"Rental {rental.id} has invalid user or movie references")

            enriched.append(RentalWithDetails(**rental.model_dump(), user=user, movie=movie))
        return enriched
