from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.team import Team
from crm.models.membership import TeamUser
from .base_repository import BaseRepository


class TeamRepository(BaseRepository[Team]):

    def __init__(self, db: AsyncSession):
        super().__init__(Team, db)

    async def get_by_name(self, name: str) -> Team | None:
        return await self.find_by_field("name", name.strip())

    async def get_by_user(self, user_id: UUID) -> list[Team]:
        query = (
            self._active_query()
            .join(TeamUser, TeamUser.team_id == Team.team_id)
            .where(TeamUser.user_id == user_id, TeamUser.active.is_(True))
            .order_by(Team.name.asc())
        )
        return await self._list(query, "get_by_user")
