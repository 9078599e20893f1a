from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.role import Role
from crm.models.membership import UserRole
from .base_repository import BaseRepository


class RoleRepository(BaseRepository[Role]):

    def __init__(self, db: AsyncSession):
        super().__init__(Role, db)

    async def get_by_name(self, name: str) -> Role | None:
        return await self.find_by_field("name", name.strip())

    async def get_by_user(self, user_id: UUID) -> list[Role]:
        """Active roles held by the user through an active user_roles link."""
        query = (
            self._active_query()
            .join(UserRole, UserRole.role_id == Role.role_id)
            .where(UserRole.user_id == user_id, UserRole.active.is_(True))
            .order_by(Role.name.asc())
        )
        return await self._list(query, "get_by_user")
