"""
Base repository class providing the common, soft-delete aware operations.

Every CRM table carries an `active` flag. Rows are never physically removed:
`delete()` clears the flag, and every default read (`get_all`, `get_by_id`,
`exists`, `find_by_field`, `count`) filters on `active = true`.

Repositories only `flush()`. The request-scoped session dependency commits the
unit of work once the endpoint succeeds.

Entity-specific repositories inherit from this class and add their own queries
through `_list()` / `_first()`, which apply the same error wrapping.
"""
from crm.exceptions.base import (
    RepositoryError,
    DuplicateError,
    InvalidFieldError
)
from crm.exceptions.mapper import db_error_handler
from crm.validators.exception_validators import (
    find_unknown_model_kwargs,
    get_required_columns,
    find_unique_conflicts,
)
from crm.database.base import Base, utcnow

import time
import uuid
from typing import TypeVar, Generic, Type, Any
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select, update, func, inspect as sa_inspect
import logging

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one SQLAlchemy model.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. `Activity`
            db: The request-scoped async session
        """
        self.model = model
        self.db = db
        # `<entity>_id` column; every CRM table has a single-column GUID key
        self.id_field: str = sa_inspect(model).primary_key[0].key
        self.id_column = getattr(model, self.id_field)

    # =================================================================================================================
    # Query helpers
    # =================================================================================================================

    def _active_query(self) -> Select:
        return select(self.model).where(self.model.active.is_(True))

    def _default_ordering(self) -> list:
        """Newest first; lookup repositories order by ordinal position instead."""
        return [self.model.created_date.desc()]

    def _apply_ordering(self, query: Select, order_by: str | None) -> Select:
        if order_by:
            if hasattr(self.model, order_by):
                logger.debug("repo.order_by", extra={"model": self.model.__name__, "order_by": order_by})
                return query.order_by(getattr(self.model, order_by))
            logger.warning(
                "repo.order_by.ignored",
                extra={"model": self.model.__name__, "order_by": order_by},
            )
        return query.order_by(*self._default_ordering())

    async def _list(self, query: Select, operation: str) -> list[ModelType]:
        """Run `query` and return all entities, wrapping driver errors."""
        try:
            result = await self.db.execute(query)
            entities = list(result.scalars().all())
            logger.debug(
                f"repo.{operation}.success",
                extra={"model": self.model.__name__, "count": len(entities)},
            )
            return entities
        except Exception as e:
            logger.error(f"repo.{operation}.failed", extra={"model": self.model.__name__}, exc_info=True)
            raise RepositoryError(f"Failed to retrieve {self.model.__name__} entities") from e

    async def _first(self, query: Select, operation: str) -> ModelType | None:
        try:
            result = await self.db.execute(query.limit(1))
            return result.scalars().first()
        except Exception as e:
            logger.error(f"repo.{operation}.failed", extra={"model": self.model.__name__}, exc_info=True)
            raise RepositoryError(f"Failed to retrieve {self.model.__name__}") from e

    async def _scalar(self, query: Select, operation: str) -> Any:
        try:
            result = await self.db.execute(query)
            return result.scalar()
        except Exception as e:
            logger.error(f"repo.{operation}.failed", extra={"model": self.model.__name__}, exc_info=True)
            raise RepositoryError(f"Failed to {operation.replace('_', ' ')} {self.model.__name__}") from e

    # =================================================================================================================
    # Reads
    # =================================================================================================================

    async def get_all(self, order_by: str | None = None) -> list[ModelType]:
        """
        All active entities.

        Args:
            order_by: Optional field name; unknown names are ignored with a warning.
        """
        query = self._apply_ordering(self._active_query(), order_by)
        return await self._list(query, "get_all")

    async def get_page(self, offset: int = 0, limit: int = 20, order_by: str | None = None) -> list[ModelType]:
        query = self._apply_ordering(self._active_query(), order_by).offset(offset).limit(limit)
        return await self._list(query, "get_page")

    async def count(self) -> int:
        query = select(func.count()).select_from(self.model).where(self.model.active.is_(True))
        return int(await self._scalar(query, "count") or 0)

    async def get_by_id(self, entity_id: UUID) -> ModelType | None:
        """
        Get an active entity by its ID.

        Returns:
            The entity, or None when it does not exist or was soft-deleted.
        """
        entity = await self._first(self._active_query().where(self.id_column == entity_id), "get_by_id")
        logger.debug(
            "repo.get_by_id",
            extra={"model": self.model.__name__, "id": str(entity_id), "found": entity is not None},
        )
        return entity

    async def exists(self, entity_id: UUID) -> bool:
        """True only for an active row; soft-deleted ids report False."""
        query = select(self.id_column).where(self.id_column == entity_id, self.model.active.is_(True)).limit(1)
        return await self._scalar(query, "exists") is not None

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        Find a single active entity by any mapped field.

        Raises:
            InvalidFieldError: If the model does not map `field`.
        """
        self._check_fields({field: value})
        return await self._first(self._active_query().where(getattr(self.model, field) == value), "find_by_field")

    async def find_all_by_field(self, field: str, value: Any) -> list[ModelType]:
        self._check_fields({field: value})
        query = self._apply_ordering(self._active_query().where(getattr(self.model, field) == value), None)
        return await self._list(query, "find_all_by_field")

    def _check_fields(self, values: dict[str, Any]) -> None:
        unknown = find_unknown_model_kwargs(self.model, values)
        if unknown:
            logger.info(
                "repo.invalid_fields",
                extra={"model": self.model.__name__, "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(
                f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown
            )

    # =================================================================================================================
    # Writes
    # =================================================================================================================

    async def add(self, entity: ModelType) -> ModelType:
        """
        Insert a new entity.

        Steps: assign an id when missing, check required columns (reporting every
        missing one), pre-check unique constraints, then flush. Integrity errors
        raised by the flush are mapped to DuplicateError / RepositoryError.

        Logging:
        - INFO for expected client errors (missing required, duplicate).
        - INFO on success with id and duration_ms.
        """
        model_name = self.model.__name__

        if getattr(entity, self.id_field, None) is None:
            setattr(entity, self.id_field, uuid.uuid4())

        values = {col.key: getattr(entity, col.key, None) for col in self.model.__table__.columns}

        missing = [c for c in get_required_columns(self.model) if values.get(c) is None]
        if missing:
            logger.info(
                "repo.add.missing_required",
                extra={"model": model_name, "missing_fields": sorted(missing)},
            )
            raise RepositoryError(
                f"Missing required field(s): {', '.join(missing)} for {model_name}", fields=missing
            )

        provided = {k: v for k, v in values.items() if v is not None}
        conflicts = await find_unique_conflicts(self.db, self.model, provided)
        if conflicts:
            logger.info(
                "repo.add.duplicate_precheck",
                extra={"model": model_name, "conflict_fields": sorted(conflicts)},
            )
            raise DuplicateError(
                f"{model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        start = time.perf_counter()
        async with db_error_handler(self.db, model_name):
            self.db.add(entity)
            await self.db.flush()
            # reloads server-side values and selectin relationships for the DTOs
            await self.db.refresh(entity)

        logger.info(
            "repo.add.success",
            extra={
                "model": model_name,
                "id": str(getattr(entity, self.id_field)),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def update(self, entity: ModelType) -> ModelType | None:
        """
        Persist changes made to an entity that is still active.

        Returns:
            The refreshed entity, or None if no active row has its id.
        """
        model_name = self.model.__name__
        entity_id = getattr(entity, self.id_field)

        # pending changes must not flush before the existence check
        with self.db.sync_session.no_autoflush:
            found = await self.exists(entity_id)
        if not found:
            logger.warning(
                "repo.update.not_found",
                extra={"model": model_name, "id": str(entity_id)},
            )
            return None

        async with db_error_handler(self.db, model_name):
            entity = await self.db.merge(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info("repo.update.success", extra={"model": model_name, "id": str(entity_id)})
        return entity

    async def delete(self, entity_id: UUID, modified_by: UUID | None = None) -> bool:
        """
        Soft delete: set `active = false` and stamp the modification fields.

        Only an active row matches, so deleting a missing or already inactive id
        writes nothing and returns False.
        """
        model_name = self.model.__name__
        values: dict[str, Any] = {"active": False, "modified_date": utcnow()}
        if modified_by is not None and hasattr(self.model, "modified_by"):
            values["modified_by"] = modified_by

        stmt = (
            update(self.model)
            .where(self.id_column == entity_id, self.model.active.is_(True))
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )

        async with db_error_handler(self.db, model_name):
            result = await self.db.execute(stmt)

        if result.rowcount == 0:
            logger.warning(
                "repo.delete.not_found",
                extra={"model": model_name, "id": str(entity_id)},
            )
            return False

        logger.info("repo.delete.success", extra={"model": model_name, "id": str(entity_id)})
        return True
