from fastapi import APIRouter, Depends

from app.api.deps import get_ledger
from app.schemas.stats import StatsResponse
from app.services.rental_ledger import RentalLedger

router = APIRouter()


@router.get("", response_model=StatsResponse)
async def get_stats(ledger: RentalLedger = Depends(get_ledger)):
    """Counters for the dashboard"""
    return await ledger.stats()
