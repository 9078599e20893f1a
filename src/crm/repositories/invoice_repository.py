from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.invoice import Invoice
from .base_repository import BaseRepository


class InvoiceRepository(BaseRepository[Invoice]):

    def __init__(self, db: AsyncSession):
        super().__init__(Invoice, db)

    async def get_by_sales_order(self, sales_order_id: UUID) -> list[Invoice]:
        return await self.find_all_by_field("sales_order_id", sales_order_id)

    async def get_by_number(self, number: str) -> Invoice | None:
        return await self.find_by_field("number", number.strip())
