"""Tests for user, movie and rental repositories."""
from datetime import date, timedelta

import pytest

from app.db.base import DuplicateRecordError
from app.models.movie import MovieCreate
from app.models.rental import RentalCreate
from app.models.user import UserCreate
from app.repositories.movie_repo import MovieRepository
from app.repositories.rental_repo import RentalRepository
from app.repositories.user_repo import UserRepository


@pytest.mark.asyncio
class TestUserRepository:
    """Test UserRepository CRUD operations."""

    async def test_create_user_success(self, memory_storage, sample_user_data):
        """Test successful user creation."""
        user_repo = UserRepository(memory_storage.users)

        user = await user_repo.create_user(UserCreate(**sample_user_data))

        assert user.id == 1
        assert user.name == sample_user_data["name"]
        assert user.email == sample_user_data["email"]
        assert user.phone == sample_user_data["phone"]
        assert user.created_at is not None

    async def test_create_user_duplicate_email(self, memory_storage, sample_user_data):
        """Test that creating user with duplicate email fails."""
        user_repo = UserRepository(memory_storage.users)
        await user_repo.create_user(UserCreate(**sample_user_data))

        duplicate_user = UserCreate(name="Another User", email=sample_user_data["email"])

        with pytest.raises(DuplicateRecordError):
            await user_repo.create_user(duplicate_user)

    async def test_get_user_by_id_not_found(self, memory_storage):
        """Test retrieving non-existent user by ID."""
        user_repo = UserRepository(memory_storage.users)

        assert await user_repo.get_user_by_id(99) is None

    async def test_update_user_success(self, memory_storage, sample_user_data):
        """Test updating user information."""
        user_repo = UserRepository(memory_storage.users)
        created = await user_repo.create_user(UserCreate(**sample_user_data))

        updated = await user_repo.update_user(created.id, {"name": "Updated Name"})

        assert updated.name == "Updated Name"
        assert updated.email == created.email
        assert updated.created_at == created.created_at

    async def test_update_user_empty_patch(self, memory_storage, sample_user_data):
        user_repo = UserRepository(memory_storage.users)
        created = await user_repo.create_user(UserCreate(**sample_user_data))

        assert await user_repo.update_user(created.id, {}) == created

    async def test_update_user_not_found(self, memory_storage):
        user_repo = UserRepository(memory_storage.users)

        assert await user_repo.update_user(99, {"name": "New Name"}) is None

    async def test_delete_user(self, memory_storage, sample_user_data):
        user_repo = UserRepository(memory_storage.users)
        created = await user_repo.create_user(UserCreate(**sample_user_data))

        assert await user_repo.delete_user(created.id) is True
        assert await user_repo.delete_user(created.id) is False
        assert await user_repo.count_users() == 0


@pytest.mark.asyncio
class TestMovieRepository:
    """Test MovieRepository operations and availability flips."""

    async def test_create_movie_is_available(self, memory_storage, sample_movie_data):
        repo = MovieRepository(memory_storage.movies)

        movie = await repo.create_movie(MovieCreate(**sample_movie_data))

        assert movie.id == 1
        assert movie.available is True
        assert movie.title == "Alien"

    async def test_claim_is_exclusive(self, memory_storage, sample_movie_data):
        repo = MovieRepository(memory_storage.movies)
        movie = await repo.create_movie(MovieCreate(**sample_movie_data))

        first = await repo.claim_movie(movie.id)
        second = await repo.claim_movie(movie.id)

        assert first.available is False
        assert second is None

    async def test_release_makes_available(self, memory_storage, sample_movie_data):
        repo = MovieRepository(memory_storage.movies)
        movie = await repo.create_movie(MovieCreate(**sample_movie_data))
        await repo.claim_movie(movie.id)

        released = await repo.release_movie(movie.id)

        assert released.available is True
        assert await repo.count_available() == 1

    async def test_list_movies_by_availability(self, memory_storage):
        repo = MovieRepository(memory_storage.movies)
        first = await repo.create_movie(MovieCreate(title="One"))
        await repo.create_movie(MovieCreate(title="Two"))
        await repo.claim_movie(first.id)

        available = await repo.list_movies(available=True)
        rented = await repo.list_movies(available=False)

        assert [m.title for m in available] == ["Two"]
        assert [m.title for m in rented] == ["One"]


@pytest.mark.asyncio
class TestRentalRepository:
    """Test RentalRepository open/returned tracking."""

    async def test_create_and_return(self, memory_storage):
        repo = RentalRepository(memory_storage.rentals)
        today = date.today()

        rental = await repo.create_rental(RentalCreate(
            user_id=1, movie_id=2, rented_date=today, due_date=today + timedelta(days=3)
        ))
        assert rental.is_open
        assert await repo.count_open(user_id=1) == 1

        returned = await repo.mark_returned(rental.id, today)

        assert returned.returned_date == today
        assert not returned.is_open
        assert await repo.count_open(user_id=1) == 0

    async def test_list_filters_by_reference(self, memory_storage):
        repo = RentalRepository(memory_storage.rentals)
        today = date.today()
        for user_id, movie_id in [(1, 1), (2, 2), (1, 3)]:
            await repo.create_rental(RentalCreate(
                user_id=user_id, movie_id=movie_id, rented_date=today, due_date=today
            ))

        assert [r.movie_id for r in await repo.list_rentals(user_id=1)] == [1, 3]
        assert [r.user_id for r in await repo.list_rentals(movie_id=2)] == [2]
        assert len(await repo.list_rentals()) == 3
