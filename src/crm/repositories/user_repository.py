"""
User repository for handling user-specific database operations.

Extends BaseRepository with login lookup, sign-in stamping and membership
queries through the team_users / user_roles junctions.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from crm.database.base import utcnow
from crm.models.user import User
from crm.models.membership import TeamUser, UserRole
from crm.exceptions.mapper import db_error_handler
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for User entity operations.

    Login names are matched exactly after trimming whitespace.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_login_name(self, login_name: str) -> User | None:
        """
        Get an active user by login name.

        Args:
            login_name: The login name to search for (case-sensitive)

        Returns:
            The User if found, None otherwise
        """
        user = await self.find_by_field("login_name", login_name.strip())
        if user is None:
            logger.debug("repo.user.login_name_not_found")
        return user

    async def get_by_team(self, team_id: UUID) -> list[User]:
        query = (
            self._active_query()
            .join(TeamUser, TeamUser.user_id == User.user_id)
            .where(TeamUser.team_id == team_id, TeamUser.active.is_(True))
            .order_by(User.login_name.asc())
        )
        return await self._list(query, "get_by_team")

    async def get_by_role(self, role_id: UUID) -> list[User]:
        query = (
            self._active_query()
            .join(UserRole, UserRole.user_id == User.user_id)
            .where(UserRole.role_id == role_id, UserRole.active.is_(True))
            .order_by(User.login_name.asc())
        )
        return await self._list(query, "get_by_role")

    async def record_login(self, user: User) -> User:
        """Stamp `last_login` after a successful sign-in."""
        async with db_error_handler(self.db, self.model.__name__):
            user.last_login = utcnow()
            await self.db.flush()
        logger.info("repo.user.login_recorded", extra={"id": str(user.user_id)})
        return user
