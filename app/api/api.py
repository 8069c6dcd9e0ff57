from fastapi import APIRouter
from app.api.endpoints import users, movies, rentals, stats

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(movies.router, prefix="/movies", tags=["movies"])
api_router.include_router(rentals.router, prefix="/rentals", tags=["rentals"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
