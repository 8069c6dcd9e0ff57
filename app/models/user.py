from pydantic import EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional

from app.models.base import CamelModel, reject_null

class UserBase(CamelModel):
    """Base user schema."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)

class UserCreate(UserBase):
    """User creation schema."""
    pass

class UserUpdate(CamelModel):
    """User update schema."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator("name", "email")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class User(UserBase):
    """Stored user."""
    id: int
    created_at: datetime
