from fastapi import HTTPException, Request, status

from app.services.rental_ledger import RentalLedger

# Largest id a MongoDB int64 can hold
MAX_ID = 2 ** 63 - 1


def get_ledger(request: Request) -> RentalLedger:
    """The ledger built at startup for this application."""
    return request.app.state.ledger


def parse_id(raw_id: str, entity: str) -> int:
    """Parse a path id or raise 400."""
    if not (raw_id.isascii() and raw_id.isdigit()) or int(raw_id) > MAX_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {entity} ID"
        )
    return int(raw_id)
