from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from app.models.base import CamelModel, reject_null


class MovieBase(CamelModel):
    """Base movie schema."""
    title: str = Field(..., min_length=1, max_length=200)
    director: Optional[str] = Field(None, max_length=100)
    year: Optional[int] = Field(None, ge=1888, le=2100)
    genre: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None


class MovieCreate(MovieBase):
    """Movie creation schema. New movies are always available."""
    pass


class MovieUpdate(CamelModel):
    """Movie update schema. Availability follows rentals and is not writable."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    director: Optional[str] = Field(None, max_length=100)
    year: Optional[int] = Field(None, ge=1888, le=2100)
    genre: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class Movie(MovieBase):
    """Stored movie."""
    id: int
    available: bool = True
    created_at: datetime
