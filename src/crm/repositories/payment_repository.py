"""
Payment and payment line item repositories.

A payment is split across invoices by its line items; the amount paid on an
invoice only counts lines that are active and whose payment is still active.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.payment import Payment, PaymentLineItem
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class PaymentRepository(BaseRepository[Payment]):

    def __init__(self, db: AsyncSession):
        super().__init__(Payment, db)

    async def get_by_invoice(self, invoice_id: UUID) -> list[Payment]:
        return await self.find_all_by_field("invoice_id", invoice_id)

    async def get_by_payment_method(self, payment_method_id: UUID) -> list[Payment]:
        return await self.find_all_by_field("payment_method_id", payment_method_id)

    async def get_by_date_range(self, start: datetime, end: datetime) -> list[Payment]:
        query = (
            self._active_query()
            .where(Payment.payment_date >= start, Payment.payment_date <= end)
            .order_by(Payment.payment_date.asc())
        )
        return await self._list(query, "get_by_date_range")


class PaymentLineItemRepository(BaseRepository[PaymentLineItem]):

    def __init__(self, db: AsyncSession):
        super().__init__(PaymentLineItem, db)

    async def get_by_payment(self, payment_id: UUID) -> list[PaymentLineItem]:
        return await self.find_all_by_field("payment_id", payment_id)

    async def get_by_invoice(self, invoice_id: UUID) -> list[PaymentLineItem]:
        return await self.find_all_by_field("invoice_id", invoice_id)

    async def get_total_paid_for_invoice(self, invoice_id: UUID) -> Decimal:
        """
        Sum of active line amounts for the invoice whose payment is also active.

        Returns:
            Decimal total rounded to cents; Decimal("0.00") when nothing was paid.
        """
        query = (
            select(func.coalesce(func.sum(PaymentLineItem.amount), 0))
            .join(Payment, PaymentLineItem.payment_id == Payment.payment_id)
            .where(
                PaymentLineItem.invoice_id == invoice_id,
                PaymentLineItem.active.is_(True),
                Payment.active.is_(True),
            )
        )
        total = await self._scalar(query, "get_total_paid_for_invoice")
        result = Decimal(str(total or 0)).quantize(CENT)
        logger.debug("repo.total_paid", extra={"invoice_id": str(invoice_id), "total": str(result)})
        return result
