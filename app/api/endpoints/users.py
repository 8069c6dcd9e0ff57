from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_ledger, parse_id
from app.models.rental import RentalWithDetails
from app.models.user import User, UserCreate, UserUpdate
from app.services.rental_ledger import DeleteOutcome, RentalLedger
from app.utils.ledger_errors import DuplicateEmailError

router = APIRouter()


@router.get("", response_model=List[User])
async def list_users(
    search: Optional[str] = Query(None, description="Match name, email or phone"),
    ledger: RentalLedger = Depends(get_ledger)
):
    """List users"""
    return await ledger.list_users(search)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, ledger: RentalLedger = Depends(get_ledger)):
    """Register a user"""
    try:
        return await ledger.create_user(user_in)
    except DuplicateEmailError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Get user by ID"""
    user = await ledger.get_user(parse_id(user_id, "user"))
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    ledger: RentalLedger = Depends(get_ledger)
):
    """Update user fields"""
    try:
        user = await ledger.update_user(parse_id(user_id, "user"), user_update)
    except DuplicateEmailError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(user_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Delete a user without open rentals"""
    outcome = await ledger.delete_user(parse_id(user_id, "user"))
    if outcome == DeleteOutcome.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if outcome == DeleteOutcome.HAS_OPEN_RENTALS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete user with active rentals"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/rentals", response_model=List[RentalWithDetails])
async def list_user_rentals(user_id: str, ledger: RentalLedger = Depends(get_ledger)):
    """Rentals for one user"""
    return await ledger.list_rentals_by_user(parse_id(user_id, "user"))
