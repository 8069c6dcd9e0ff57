"""Sample data for demos: 4 users, 7 movies, 3 open rentals."""

import logging
from datetime import date, timedelta

from app.models.movie import MovieCreate
from app.models.rental import RentalCreate
from app.models.user import UserCreate
from app.services.rental_ledger import RentalLedger

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"name": "John Smith", "email": "john.smith@example.com", "phone": "555-123-4567"},
    {"name": "Jane Cooper", "email": "jane.cooper@example.com", "phone": "555-987-6543"},
    {"name": "Robert Johnson", "email": "robert.j@example.com", "phone": "555-456-7890"},
    {"name": "Anna Davis", "email": "anna.davis@example.com", "phone": "555-789-1234"},
]

SAMPLE_MOVIES = [
    {
        "title": "Inception", "director": "Christopher Nolan", "year": 2010, "genre": "Sci-Fi",
        "description": "A thief who steals corporate secrets through the use of dream-sharing technology."
    },
    {
        "title": "The Matrix", "director": "Lana Wachowski", "year": 1999, "genre": "Sci-Fi",
        "description": "A computer hacker learns about the true nature of reality and his role in the war against the controllers."
    },
    {
        "title": "The Shawshank Redemption", "director": "Frank Darabont", "year": 1994, "genre": "Drama",
        "description": "Two imprisoned men bond over a number of years, finding solace and eventual redemption through acts of common decency."
    },
    {
        "title": "Interstellar", "director": "Christopher Nolan", "year": 2014, "genre": "Sci-Fi",
        "description": "A team of explorers travel through a wormhole in space in an attempt to ensure humanity's survival."
    },
    {
        "title": "Pulp Fiction", "director": "Quentin Tarantino", "year": 1994, "genre": "Crime/Drama",
        "description": "The lives of two mob hitmen, a boxer, a gangster and his wife intersect in four tales of violence and redemption."
    },
    {
        "title": "The Godfather", "director": "Francis Ford Coppola", "year": 1972, "genre": "Crime/Drama",
        "description": "The aging patriarch of an organized crime dynasty transfers control to his reluctant son."
    },
    {
        "title": "Parasite", "director": "Bong Joon Ho", "year": 2019, "genre": "Drama/Thriller",
        "description": "Greed and class discrimination threaten the newly formed symbiotic relationship between the wealthy Park family and the destitute Kim clan."
    },
]


async def seed_sample_data(ledger: RentalLedger, today: date | None = None) -> bool:
    """Insert sample records unless users already exist. Returns True if seeded."""
    if await ledger.users.count_users():
        return False

    today = today or date.today()
    users = [await ledger.create_user(UserCreate(**data)) for data in SAMPLE_USERS]
    movies = [await ledger.create_movie(MovieCreate(**data)) for data in SAMPLE_MOVIES]

    rentals = [
        # Active
        (users[0], movies[0], today - timedelta(days=7), today + timedelta(days=7), "First rental"),
        # Due today
        (users[1], movies[1], today - timedelta(days=7), today, "Please return on time"),
        # Overdue
        (users[2], movies[2], today - timedelta(days=10), today - timedelta(days=3), "Extended rental"),
    ]
    for user, movie, rented, due, notes in rentals:
        await ledger.create_rental(RentalCreate(
            user_id=user.id,
            movie_id=movie.id,
            rented_date=rented,
            due_date=due,
            notes=notes
        ))

    logger.info("Seeded %d users, %d movies, %d rentals", len(users), len(movies), len(rentals))
    return True
