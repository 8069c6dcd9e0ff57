"""
Rental model - A movie lent to a user.

Lifecycle:
- Created open (returned_date is None); the movie becomes unavailable
- Returned once by setting returned_date; the movie becomes available
- May be deleted in either state; deleting an open rental releases the movie
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field, computed_field, model_validator

from app.models.base import CalendarDate, CamelModel
from app.models.movie import Movie
from app.models.user import User


class RentalStatus(str, Enum):
    ACTIVE = "active"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"
    RETURNED = "returned"


class RentalBase(CamelModel):
    """Base rental schema."""
    user_id: int = Field(..., ge=1)
    movie_id: int = Field(..., ge=1)
    rented_date: CalendarDate
    due_date: CalendarDate
    notes: Optional[str] = None


class RentalCreate(RentalBase):
    """
    Rental creation schema.

    Invariants:
    - due_date >= rented_date
    """

    @model_validator(mode="after")
    def check_due_date(self):
        if self.due_date < self.rented_date:
            raise ValueError("Due date must be on or after the rented date")
        return self


class Rental(RentalBase):
    """Stored rental."""
    id: int
    returned_date: Optional[CalendarDate] = None
    created_at: datetime

    @property
    def is_open(self) -> bool:
        return self.returned_date is None


class RentalWithDetails(Rental):
    """Rental joined at read time with its current user and movie."""
    user: User
    movie: Movie

    @computed_field
    @property
    def status(self) -> RentalStatus:
        if self.returned_date is not None:
            return RentalStatus.RETURNED
        today = date.today()
        if self.due_date < today:
            return RentalStatus.OVERDUE
        if self.due_date == today:
            return RentalStatus.DUE_TODAY
        return RentalStatus.ACTIVE
