"""
Declarative base and shared column sets for all CRM ORM models.

Every mutable CRM row carries the same audit columns and an `active` flag used
for soft delete; `AuditMixin` declares them once. Lookup (type/status) tables
add a label, description and ordinal position via `LookupMixin`.
"""

import uuid
from datetime import datetime, timezone, timedelta

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


def utcnow() -> datetime:
    """Naive UTC timestamp (SQL Server `datetime2` has no offset)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def next_modified_date(previous: datetime | None) -> datetime:
    """
    Return a modification timestamp strictly after `previous`.

    Two writes inside the same clock tick would otherwise share a timestamp.
    """
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class AuditMixin:
    """Audit trail + soft-delete flag shared by every mutable entity."""

    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    created_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    modified_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    modified_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class LookupMixin(AuditMixin):
    """
    Columns of a type/status lookup table.

    The label column name differs per table (`type`, `status`, `name`), so the
    concrete model declares it and names it in `__label_field__`.
    """

    __label_field__: str = "type"

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    ordinal_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def label(self) -> str:
        return getattr(self, self.__label_field__)

    @label.setter
    def label(self, value: str) -> None:
        setattr(self, self.__label_field__, value)


__all__ = ["Base", "AuditMixin", "LookupMixin", "utcnow", "next_modified_date"]
