"""
Repository for two-key junction tables (team_users, user_roles).

A link is identified by its (first, second) id pair. Unlinking clears `active`;
linking again reactivates the same row instead of inserting a duplicate.
"""
import logging
from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crm.database.base import Base, utcnow
from crm.models.membership import TeamUser, UserRole
from crm.exceptions.base import RepositoryError
from crm.exceptions.mapper import db_error_handler

JunctionType = TypeVar("JunctionType", bound=Base)

logger = logging.getLogger(__name__)


class JunctionRepository(Generic[JunctionType]):
    """
    Args:
        model: junction model class
        first_field / second_field: names of the two key columns, in URL order
    """

    def __init__(self, model: Type[JunctionType], db: AsyncSession, first_field: str, second_field: str):
        self.model = model
        self.db = db
        self.first_field = first_field
        self.second_field = second_field
        self.first_column = getattr(model, first_field)
        self.second_column = getattr(model, second_field)

    def _active_query(self):
        return select(self.model).where(self.model.active.is_(True))

    async def _list(self, query, operation: str) -> list[JunctionType]:
        try:
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"repo.{operation}.failed", extra={"model": self.model.__name__}, exc_info=True)
            raise RepositoryError(f"Failed to retrieve {self.model.__name__} links") from e

    async def get_by_id(self, first_id: UUID, second_id: UUID) -> JunctionType | None:
        rows = await self._list(
            self._active_query().where(self.first_column == first_id, self.second_column == second_id),
            "get_by_id",
        )
        return rows[0] if rows else None

    async def get_by_first_id(self, first_id: UUID) -> list[JunctionType]:
        return await self._list(self._active_query().where(self.first_column == first_id), "get_by_first_id")

    async def get_by_second_id(self, second_id: UUID) -> list[JunctionType]:
        return await self._list(self._active_query().where(self.second_column == second_id), "get_by_second_id")

    async def get_all(self) -> list[JunctionType]:
        return await self._list(self._active_query(), "get_all")

    async def add(self, first_id: UUID, second_id: UUID) -> JunctionType:
        """Create the link, or reactivate it when a soft-deleted row exists."""
        model_name = self.model.__name__
        async with db_error_handler(self.db, model_name):
            link = await self.db.get(self.model, {self.first_field: first_id, self.second_field: second_id})
            if link is None:
                link = self.model(**{self.first_field: first_id, self.second_field: second_id})
                link.active = True
                link.modified_date = utcnow()
                self.db.add(link)
                event = "repo.link.created"
            elif not link.active:
                link.active = True
                link.modified_date = utcnow()
                event = "repo.link.reactivated"
            else:
                event = "repo.link.unchanged"
            await self.db.flush()

        logger.info(
            event,
            extra={"model": model_name, self.first_field: str(first_id), self.second_field: str(second_id)},
        )
        return link

    async def _deactivate(self, *conditions) -> int:
        stmt = (
            update(self.model)
            .where(*conditions, self.model.active.is_(True))
            .values(active=False, modified_date=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(stmt)
        return result.rowcount

    async def delete(self, first_id: UUID, second_id: UUID) -> bool:
        count = await self._deactivate(self.first_column == first_id, self.second_column == second_id)
        if count == 0:
            logger.warning(
                "repo.unlink.not_found",
                extra={"model": self.model.__name__, self.first_field: str(first_id), self.second_field: str(second_id)},
            )
            return False
        logger.info(
            "repo.unlink.success",
            extra={"model": self.model.__name__, self.first_field: str(first_id), self.second_field: str(second_id)},
        )
        return True

    async def delete_by_first_id(self, first_id: UUID) -> int:
        """Unlink every active row for `first_id`; returns how many were deactivated."""
        count = await self._deactivate(self.first_column == first_id)
        logger.info("repo.unlink_all.success", extra={"model": self.model.__name__, "count": count})
        return count

    async def delete_by_second_id(self, second_id: UUID) -> int:
        count = await self._deactivate(self.second_column == second_id)
        logger.info("repo.unlink_all.success", extra={"model": self.model.__name__, "count": count})
        return count


class TeamUserRepository(JunctionRepository):
    def __init__(self, db: AsyncSession):
        super().__init__(TeamUser, db, "team_id", "user_id")


class UserRoleRepository(JunctionRepository):
    def __init__(self, db: AsyncSession):
        super().__init__(UserRole, db, "user_id", "role_id")
