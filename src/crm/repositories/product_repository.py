from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.product import Product
from .base_repository import BaseRepository


class ProductRepository(BaseRepository[Product]):

    def __init__(self, db: AsyncSession):
        super().__init__(Product, db)

    async def get_by_name(self, name: str) -> Product | None:
        return await self.find_by_field("name", name.strip())

    async def get_by_product_type(self, product_type_id: UUID) -> list[Product]:
        return await self.find_all_by_field("product_type_id", product_type_id)
