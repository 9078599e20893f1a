"""
Quote and quote line item repositories.
"""

import logging
from decimal import Decimal
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.quote import Quote, QuoteLineItem
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def line_total(line: QuoteLineItem) -> Decimal:
    """
    Net + tax for one line.

    gross    = quantity * unit_price
    discount = discount_amount if > 0, else gross * discount_percentage / 100
    tax      = (gross - discount) * tax_percentage / 100
    """
    gross = Decimal(line.quantity) * Decimal(line.unit_price)

    if line.discount_amount is not None and line.discount_amount > 0:
        discount = Decimal(line.discount_amount)
    elif line.discount_percentage is not None and line.discount_percentage > 0:
        discount = gross * Decimal(line.discount_percentage) / HUNDRED
    else:
        discount = Decimal("0")

    net = gross - discount
    tax = Decimal("0")
    if line.tax_percentage is not None and line.tax_percentage > 0:
        tax = net * Decimal(line.tax_percentage) / HUNDRED

    return net + tax


class QuoteRepository(BaseRepository[Quote]):

    def __init__(self, db: AsyncSession):
        super().__init__(Quote, db)

    async def get_by_number(self, number: str) -> Quote | None:
        return await self.find_by_field("number", number.strip())

    async def get_by_quote_status(self, quote_status_id: UUID) -> list[Quote]:
        return await self.find_all_by_field("quote_status_id", quote_status_id)


class QuoteLineItemRepository(BaseRepository[QuoteLineItem]):

    def __init__(self, db: AsyncSession):
        super().__init__(QuoteLineItem, db)

    async def get_by_quote(self, quote_id: UUID) -> list[QuoteLineItem]:
        """Active lines of a quote in line-number order."""
        query = (
            self._active_query()
            .where(QuoteLineItem.quote_id == quote_id)
            .order_by(QuoteLineItem.line_number.asc())
        )
        return await self._list(query, "get_by_quote")

    async def get_total_for_quote(self, quote_id: UUID) -> Decimal:
        """Sum of `line_total` over the quote's active lines, rounded to cents."""
        lines = await self.get_by_quote(quote_id)
        total = sum((line_total(line) for line in lines), Decimal("0")).quantize(CENT)
        logger.debug(
            "repo.quote_total",
            extra={"quote_id": str(quote_id), "lines": len(lines), "total": str(total)},
        )
        return total
