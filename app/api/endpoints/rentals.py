from typing import List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from app.api.deps import get_ledger, parse_id
from app.models.rental import RentalCreate, RentalStatus, RentalWithDetails
from app.schemas.rental import RentalReturnRequest
from app.services.rental_ledger import RentalLedger
from app.utils.ledger_errors import MovieUnavailableError, ReferenceNotFoundError

router = APIRouter()


@router.get("", response_model=List[RentalWithDetails])
async def list_rentals(
    rental_status: Optional[RentalStatus] = Query(None, alias="status"),
    ledger: RentalLedger = Depends(get_ledger)
):
    """List rentals with their user and movie"""
    return await ledger.list_rentals(rental_status)


@router.post("", response_model=RentalWithDetails, status_code=status.HTTP_201_CREATED)
async def create_rental(rental_in: RentalCreate, ledger: RentalLedger = Depends(get_ledger)):
    """Rent a movie to a user"""
    try:
        return await ledger.create_rental(rental_in)
    except ReferenceNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except MovieUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/{rental_id}", response_model=RentalWithDetails)
async def get_rental(rental_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Get rental by ID"""
    rental = await ledger.get_rental(parse_id(rental_id, "rental"))
    if not rental:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rental not found")
    return rental


@router.patch("/{rental_id}/return", response_model=RentalWithDetails)
async def return_rental(
    rental_id: str,
    payload: Optional[RentalReturnRequest] = Body(None),
    ledger: RentalLedger = Depends(get_ledger)
):
    """Mark a rental returned (today unless returnDate is given)"""
    return_date = payload.return_date if payload else None
    rental = await ledger.return_rental(parse_id(rental_id, "rental"), return_date)
    if not rental:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rental not found")
    return rental


@router.delete("/{rental_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_rental(rental_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Delete a rental, releasing the movie if still out"""
    deleted = await ledger.delete_rental(parse_id(rental_id, "rental"))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rental not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
