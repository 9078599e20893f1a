"""
Type/status lookup tables.

Each row has a short label, an optional description and an ordinal position
that controls display order; the row with the lowest ordinal position is the
"default". Label column names follow the legacy schema: `type` for *Type
tables, `status` for *Status tables and `name` for payment methods.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from crm.database.base import Base, LookupMixin


class AccountType(LookupMixin, Base):
    __tablename__ = "account_types"

    account_type_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class AccountStatus(LookupMixin, Base):
    __tablename__ = "account_statuses"
    __label_field__ = "status"

    account_status_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class ActivityType(LookupMixin, Base):
    __tablename__ = "activity_types"

    activity_type_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class ActivityStatus(LookupMixin, Base):
    __tablename__ = "activity_statuses"
    __label_field__ = "status"

    activity_status_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class InvoiceStatus(LookupMixin, Base):
    __tablename__ = "invoice_statuses"
    __label_field__ = "status"

    invoice_status_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class PaymentMethod(LookupMixin, Base):
    __tablename__ = "payment_methods"
    __label_field__ = "name"

    payment_method_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class QuoteStatus(LookupMixin, Base):
    __tablename__ = "quote_statuses"
    __label_field__ = "status"

    quote_status_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class SalesOrderStatus(LookupMixin, Base):
    __tablename__ = "sales_order_statuses"
    __label_field__ = "status"

    sales_order_status_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class ProductType(LookupMixin, Base):
    __tablename__ = "product_types"

    product_type_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class ServiceType(LookupMixin, Base):
    __tablename__ = "service_types"

    service_type_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ServiceType(id={self.service_type_id!r}, type={self.type!r})>"
