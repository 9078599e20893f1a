"""
Activity repository: assignment, status and scheduling lookups.
"""

from datetime import datetime
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.activity import Activity
from .base_repository import BaseRepository


class ActivityRepository(BaseRepository[Activity]):
    """
    Repository for Activity entity operations.

    Every query here only sees active rows and orders newest first, like the
    inherited `get_all`.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Activity, db)

    async def get_by_activity_type(self, activity_type_id: UUID) -> list[Activity]:
        return await self.find_all_by_field("activity_type_id", activity_type_id)

    async def get_by_activity_status(self, activity_status_id: UUID) -> list[Activity]:
        return await self.find_all_by_field("activity_status_id", activity_status_id)

    async def get_by_assigned_user(self, user_id: UUID) -> list[Activity]:
        return await self.find_all_by_field("assigned_user_id", user_id)

    async def get_by_assigned_team(self, team_id: UUID) -> list[Activity]:
        return await self.find_all_by_field("assigned_team_id", team_id)

    async def get_by_due_date_range(self, start: datetime, end: datetime) -> list[Activity]:
        """Activities due between `start` and `end`, both inclusive, earliest first."""
        query = (
            self._active_query()
            .where(Activity.due_date >= start, Activity.due_date <= end)
            .order_by(Activity.due_date.asc())
        )
        return await self._list(query, "get_by_due_date_range")

    async def get_completed(self) -> list[Activity]:
        query = self._apply_ordering(self._active_query().where(Activity.completed_date.is_not(None)), None)
        return await self._list(query, "get_completed")

    async def get_incomplete(self) -> list[Activity]:
        query = self._apply_ordering(self._active_query().where(Activity.completed_date.is_(None)), None)
        return await self._list(query, "get_incomplete")
