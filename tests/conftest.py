import os
from datetime import date, timedelta

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.memory import MemoryStorage
from app.db.mongo import MongoStorage
from app.main import create_app
from app.models.movie import MovieCreate
from app.models.rental import RentalCreate
from app.models.user import UserCreate
from app.services.rental_ledger import RentalLedger

# Test database configuration
TEST_MONGODB_URI = os.getenv("MONGODB_URI")
TEST_MONGODB_DB = "movie_rentals_test"


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Fresh in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def ledger(memory_storage) -> RentalLedger:
    """Ledger over empty in-memory storage."""
    return RentalLedger(memory_storage)


@pytest_asyncio.fixture
async def mongo_storage():
    """MongoDB storage on a scratch database. Skipped without MONGODB_URI."""
    if not TEST_MONGODB_URI:
        pytest.skip("MONGODB_URI not set")

    storage = MongoStorage(TEST_MONGODB_URI, TEST_MONGODB_DB)
    await storage.connect()
    # Drop database before test to ensure clean state
    await storage.client.drop_database(TEST_MONGODB_DB)
    await storage.create_indexes()

    yield storage

    await storage.client.drop_database(TEST_MONGODB_DB)
    await storage.close()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(STORAGE_BACKEND="memory", SEED_SAMPLE_DATA=False, LOG_LEVEL="WARNING")


@pytest.fixture
def test_client(test_settings):
    """Client for an app with empty storage."""
    # Use TestClient with context manager to trigger lifespan
    with TestClient(create_app(test_settings)) as client:
        yield client


@pytest.fixture
def seeded_client():
    """Client for an app started with the sample data."""
    settings = Settings(STORAGE_BACKEND="memory", SEED_SAMPLE_DATA=True, LOG_LEVEL="WARNING")
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def sample_user_data():
    """Sample user data for testing."""
    return {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "555-000-1111"
    }


@pytest.fixture
def sample_movie_data():
    """Sample movie data for testing."""
    return {
        "title": "Alien",
        "director": "Ridley Scott",
        "year": 1979,
        "genre": "Sci-Fi"
    }


@pytest.fixture
def rental_dates():
    today = date.today()
    return today, today + timedelta(days=7)


@pytest_asyncio.fixture
async def created_user(ledger, sample_user_data):
    """Create a sample user in the ledger."""
    return await ledger.create_user(UserCreate(**sample_user_data))


@pytest_asyncio.fixture
async def created_movie(ledger, sample_movie_data):
    """Create a sample movie in the ledger."""
    return await ledger.create_movie(MovieCreate(**sample_movie_data))


@pytest_asyncio.fixture
async def open_rental(ledger, created_user, created_movie, rental_dates):
    """An open rental of the sample movie by the sample user."""
    rented, due = rental_dates
    return await ledger.create_rental(RentalCreate(
        user_id=created_user.id,
        movie_id=created_movie.id,
        rented_date=rented,
        due_date=due
    ))


@pytest.fixture
def make_user(test_client):
    """Create a user through the API and return its JSON."""
    def _make_user(**overrides):
        payload = {"name": "Alice", "email": "alice@example.com"}
        payload.update(overrides)
        response = test_client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make_user


@pytest.fixture
def make_movie(test_client):
    """Create a movie through the API and return its JSON."""
    def _make_movie(**overrides):
        payload = {"title": "Heat", "director": "Michael Mann", "year": 1995}
        payload.update(overrides)
        response = test_client.post("/api/movies", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make_movie


@pytest.fixture
def rent_movie(test_client):
    """POST a rental and return the raw response."""
    def _rent_movie(user_id, movie_id, rented=None, due=None):
        rented = rented or date.today()
        due = due or rented + timedelta(days=7)
        return test_client.post("/api/rentals", json={
            "userId": user_id,
            "movieId": movie_id,
            "rentedDate": rented.isoformat(),
            "dueDate": due.isoformat()
        })
    return _rent_movie
