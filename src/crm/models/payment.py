from sqlalchemy import DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from decimal import Decimal
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lookups import PaymentMethod


class Payment(AuditMixin, Base):
    """A payment received against an invoice."""
    __tablename__ = "payments"

    payment_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("invoices.invoice_id"), nullable=False, index=True
    )
    payment_method_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("payment_methods.payment_method_id"), nullable=False, index=True
    )
    payment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    reference_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    payment_method: Mapped["PaymentMethod | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Payment(id={self.payment_id!r}, amount={self.amount!r})>"


class PaymentLineItem(AuditMixin, Base):
    """
    Allocation of part of a payment to an invoice.

    The amount paid on an invoice is the sum of its active line items whose
    parent payment is also active.
    """
    __tablename__ = "payment_line_items"

    payment_line_item_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    payment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("payments.payment_id"), nullable=False, index=True
    )
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("invoices.invoice_id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
