from app.models.base import CamelModel


class StatsResponse(CamelModel):
    """Dashboard counters."""
    active_rentals: int
    available_movies: int
    registered_users: int
