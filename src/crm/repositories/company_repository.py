from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.company import Company
from .base_repository import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company entity operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Company, db)

    async def get_by_account_type(self, account_type_id: UUID) -> list[Company]:
        return await self.find_all_by_field("account_type_id", account_type_id)

    async def get_by_account_status(self, account_status_id: UUID) -> list[Company]:
        return await self.find_all_by_field("account_status_id", account_status_id)

    async def get_children(self, parent_company_id: UUID) -> list[Company]:
        return await self.find_all_by_field("parent_company_id", parent_company_id)

    async def search_by_name(self, term: str) -> list[Company]:
        """
        Case-insensitive substring match on the company name, ordered by name.
        """
        pattern = f"%{term.strip()}%"
        query = self._active_query().where(Company.name.ilike(pattern)).order_by(Company.name.asc())
        return await self._list(query, "search_by_name")
