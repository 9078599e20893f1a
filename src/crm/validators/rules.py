"""
Rule helpers used by the command validators.

Each rule returns an error message or None. `collect` drops the Nones, so a
validator reports every violated rule in declaration order.
"""
from datetime import datetime
from decimal import Decimal
from uuid import UUID

NIL_UUID = UUID(int=0)


def collect(*results: str | None) -> list[str]:
    return [r for r in results if r is not None]


def is_missing_id(value: UUID | None) -> bool:
    return value is None or value == NIL_UUID


def required_id(value: UUID | None, message: str) -> str | None:
    """Missing or the nil UUID."""
    return message if is_missing_id(value) else None


def optional_id(value: UUID | None, message: str) -> str | None:
    """Absent is fine; a supplied nil UUID is not."""
    return message if value is not None and value == NIL_UUID else None


def required_text(value: str | None, message: str) -> str | None:
    return message if value is None or not value.strip() else None


def max_length(value: str | None, limit: int, message: str) -> str | None:
    return message if value is not None and len(value) > limit else None


def required_value(value, message: str) -> str | None:
    return message if value is None else None


def non_negative(value: int | Decimal | None, message: str) -> str | None:
    return message if value is not None and value < 0 else None


def positive(value: int | Decimal | None, message: str) -> str | None:
    return message if value is not None and value <= 0 else None


def in_range(value: Decimal | None, low: Decimal, high: Decimal, message: str) -> str | None:
    return message if value is not None and not (low <= value <= high) else None


def not_after(earlier: datetime | None, later: datetime | None, message: str) -> str | None:
    """Only checked when both dates are present."""
    if earlier is not None and later is not None and earlier > later:
        return message
    return None
