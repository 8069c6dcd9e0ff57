from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_date(value: Any) -> Any:
    """Accept full ISO datetimes (and stored datetimes) where a date is expected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


CalendarDate = Annotated[date, BeforeValidator(_to_date)]


def reject_null(value: Optional[Any]) -> Any:
    """For partial updates: a field may be omitted but not set to null."""
    if value is None:
        raise ValueError("may not be null")
    return value


class CamelModel(BaseModel):
    """snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )
