from sqlalchemy import ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from decimal import Decimal
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lookups import QuoteStatus


class Quote(AuditMixin, Base):
    __tablename__ = "quotes"

    quote_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    quote_status_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("quote_statuses.quote_status_id"), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    quote_status: Mapped["QuoteStatus | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Quote(id={self.quote_id!r}, number={self.number!r})>"


class QuoteLineItem(AuditMixin, Base):
    """
    One priced line of a quote.

    Discount is either an absolute amount or a percentage of quantity * unit
    price (the amount wins when both are set); tax is a percentage of the
    discounted net.
    """
    __tablename__ = "quote_line_items"

    quote_line_item_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    quote_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("quotes.quote_id"), nullable=False, index=True
    )
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("products.product_id"), nullable=True, index=True
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=Decimal("1"))
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    discount_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    discount_amount: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    tax_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
