from sqlalchemy import DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from decimal import Decimal
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lookups import SalesOrderStatus


class SalesOrder(AuditMixin, Base):
    """SQLAlchemy model for SalesOrder; optionally raised from an accepted quote."""
    __tablename__ = "sales_orders"

    sales_order_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    sales_order_status_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("sales_order_statuses.sales_order_status_id"), nullable=False, index=True
    )
    quote_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("quotes.quote_id"), nullable=True, index=True
    )

    number: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    order_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    ship_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    total_discount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    due_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))

    sales_order_status: Mapped["SalesOrderStatus | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<SalesOrder(id={self.sales_order_id!r}, number={self.number!r})>"
