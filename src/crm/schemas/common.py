"""
Base schema and shared DTO pieces.

All request and response bodies use camelCase on the wire; Python code uses
snake_case attribute names. `populate_by_name` lets both be used when
constructing models in code and tests.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


# Money is kept as Decimal in Python and written as a JSON number
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


def to_naive_utc(value: datetime) -> datetime:
    """Offset-aware values are converted to UTC; naive values are taken as UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Incoming timestamps, stored as naive UTC like the audit columns
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class CamelModel(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuditDto(CamelModel):
    """Audit trail shown on details views."""
    created_by: UUID
    created_date: datetime
    modified_by: UUID
    modified_date: datetime
    active: bool
