from datetime import datetime
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.sales_order import SalesOrder
from .base_repository import BaseRepository


class SalesOrderRepository(BaseRepository[SalesOrder]):

    def __init__(self, db: AsyncSession):
        super().__init__(SalesOrder, db)

    async def get_by_number(self, number: str) -> SalesOrder | None:
        return await self.find_by_field("number", number.strip())

    async def get_by_sales_order_status(self, sales_order_status_id: UUID) -> list[SalesOrder]:
        return await self.find_all_by_field("sales_order_status_id", sales_order_status_id)

    async def get_by_quote(self, quote_id: UUID) -> list[SalesOrder]:
        return await self.find_all_by_field("quote_id", quote_id)

    async def get_by_order_date_range(self, start: datetime, end: datetime) -> list[SalesOrder]:
        query = (
            self._active_query()
            .where(SalesOrder.order_date >= start, SalesOrder.order_date <= end)
            .order_by(SalesOrder.order_date.asc())
        )
        return await self._list(query, "get_by_order_date_range")
