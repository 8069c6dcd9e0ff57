from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_ledger, parse_id
from app.models.movie import Movie, MovieCreate, MovieUpdate
from app.models.rental import RentalWithDetails
from app.services.rental_ledger import DeleteOutcome, RentalLedger

router = APIRouter()


@router.get("", response_model=List[Movie])
async def list_movies(
    search: Optional[str] = Query(None, description="Match title, director or genre"),
    available: Optional[bool] = Query(None, description="Only available or only rented movies"),
    ledger: RentalLedger = Depends(get_ledger)
):
    """List movies"""
    return await ledger.list_movies(search, available)


@router.post("", response_model=Movie, status_code=status.HTTP_201_CREATED)
async def create_movie(movie_in: MovieCreate, ledger: RentalLedger = Depends(get_ledger)):
    """Add a movie to the catalogue"""
    return await ledger.create_movie(movie_in)


@router.get("/{movie_id}", response_model=Movie)
async def get_movie(movie_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Get movie by ID"""
    movie = await ledger.get_movie(parse_id(movie_id, "movie"))
    if not movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return movie


@router.patch("/{movie_id}", response_model=Movie)
async def update_movie(
    movie_id: str,
    movie_update: MovieUpdate,
    ledger: RentalLedger = Depends(get_ledger)
):
    """Update movie fields"""
    movie = await ledger.update_movie(parse_id(movie_id, "movie"), movie_update)
    if not movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return movie


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_movie(movie_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Delete a movie without open rentals"""
    outcome = await ledger.delete_movie(parse_id(movie_id, "movie"))
    if outcome == DeleteOutcome.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    if outcome == DeleteOutcome.HAS_OPEN_RENTALS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete movie with active rentals"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{movie_id}/rentals", response_model=List[RentalWithDetails])
async def list_movie_rentals(movie_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Rental history for one movie"""
    return await ledger.list_rentals_by_movie(parse_id(movie_id, "movie"))
