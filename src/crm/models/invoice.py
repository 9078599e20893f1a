from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lookups import InvoiceStatus


class Invoice(AuditMixin, Base):
    """
    SQLAlchemy model for Invoice.

    An invoice is usually raised from a sales order; payments settle it through
    payment line items.
    """
    __tablename__ = "invoices"

    invoice_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    sales_order_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("sales_orders.sales_order_id"), nullable=True, index=True
    )
    invoice_status_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("invoice_statuses.invoice_status_id"), nullable=True, index=True
    )

    # Invoice numbers are unique business keys
    number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    invoice_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    invoice_status: Mapped["InvoiceStatus | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Invoice(id={self.invoice_id!r}, number={self.number!r})>"
