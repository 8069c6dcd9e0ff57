from typing import Optional

from app.models.base import CalendarDate, CamelModel


class RentalReturnRequest(CamelModel):
    """Request body to return a rental. Defaults to today."""
    return_date: Optional[CalendarDate] = None
