"""
Repository shared by every type/status lookup table.

Lookups are ordered by `ordinal_position`; the active row with the lowest
position is the default choice offered to clients.
"""
import logging
from typing import Type

from sqlalchemy.ext.asyncio import AsyncSession

from crm.database.base import LookupMixin
from .base_repository import BaseRepository, ModelType

logger = logging.getLogger(__name__)


class LookupRepository(BaseRepository[ModelType]):

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        if not issubclass(model, LookupMixin):
            raise TypeError(f"{model.__name__} is not a lookup model")
        super().__init__(model, db)
        self.label_field: str = model.__label_field__

    def _default_ordering(self) -> list:
        return [self.model.ordinal_position.asc(), getattr(self.model, self.label_field).asc()]

    async def get_by_ordinal_position(self) -> list[ModelType]:
        """Active rows in display order."""
        return await self._list(
            self._active_query().order_by(*self._default_ordering()),
            "get_by_ordinal_position",
        )

    async def get_default(self) -> ModelType | None:
        entity = await self._first(
            self._active_query().order_by(*self._default_ordering()),
            "get_default",
        )
        if entity is None:
            logger.debug("repo.get_default.empty", extra={"model": self.model.__name__})
        return entity

    async def get_by_label(self, label: str) -> list[ModelType]:
        """Active rows whose label (type, status or name) equals `label`."""
        column = getattr(self.model, self.label_field)
        return await self._list(
            self._active_query().where(column == label).order_by(*self._default_ordering()),
            "get_by_label",
        )
