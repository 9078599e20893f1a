"""
Generic command/query handlers.

One handler class per request type, parameterised by the feature. Each
handler makes its repository call, maps the result and returns it. Logging:

- INFO `handler.<kind>.start` / `handler.<kind>.success`
- WARNING when an update/delete target is missing or already inactive
- ERROR `handler.<kind>.failed` with the stack trace; the exception is re-raised

"Not found" is a negative result (None / False / empty list), never an
exception; the HTTP layer decides what it becomes.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from crm.config.settings import get_settings
from crm.schemas.envelope import PagedResult
from .features import Feature, JunctionFeature
from .requests import (
    CreateCommand,
    DeleteCommand,
    FindOneQuery,
    GetAllQuery,
    GetByIdQuery,
    GetPagedQuery,
    LinkCommand,
    ListByQuery,
    ListLinksQuery,
    Request,
    ScalarQuery,
    UnlinkCommand,
    UpdateCommand,
)

logger = logging.getLogger(__name__)


class Handler:
    """Base: owns the session-bound repository and the start/success/failed logging."""

    kind: str = "request"

    def __init__(self, session: AsyncSession, feature: Feature | JunctionFeature):
        self.session = session
        self.feature = feature
        self.repository = feature.repository(session)

    def _context(self, request: Request) -> dict[str, Any]:
        return {"feature": self.feature.name}

    async def handle(self, request: Request) -> Any:
        context = self._context(request)
        logger.info(f"handler.{self.kind}.start", extra=context)
        try:
            result = await self.execute(request)
        except Exception:
            logger.error(f"handler.{self.kind}.failed", extra=context, exc_info=True)
            raise
        logger.info(f"handler.{self.kind}.success", extra=context)
        return result

    async def execute(self, request: Request) -> Any:
        raise NotImplementedError


# =================================================================================================================
# Queries
# =================================================================================================================

class GetAllHandler(Handler):
    kind = "get_all"

    async def execute(self, request: GetAllQuery) -> list:
        entities = await self.repository.get_all()
        return [self.feature.to_list_dto(e) for e in entities]


class GetPagedHandler(Handler):
    kind = "get_paged"

    def _context(self, request: GetPagedQuery) -> dict[str, Any]:
        return {
            "feature": self.feature.name,
            "page_number": request.page_number,
            "page_size": request.page_size,
        }

    async def execute(self, request: GetPagedQuery) -> PagedResult:
        page_size = min(request.page_size, get_settings().MAX_PAGE_SIZE)
        offset = (request.page_number - 1) * page_size
        entities = await self.repository.get_page(offset, page_size)
        total = await self.repository.count()
        return PagedResult.create(
            items=[self.feature.to_list_dto(e) for e in entities],
            total_count=total,
            page_number=request.page_number,
            page_size=page_size,
        )


class GetByIdHandler(Handler):
    kind = "get_by_id"

    def _context(self, request: GetByIdQuery) -> dict[str, Any]:
        return {"feature": self.feature.name, "id": str(request.id)}

    async def execute(self, request: GetByIdQuery) -> Any | None:
        entity = await self.repository.get_by_id(request.id)
        if entity is None:
            return None
        return self.feature.to_details_dto(entity)


class _MethodQueryHandler(Handler):
    """Calls the repository method named by the request."""

    def _context(self, request) -> dict[str, Any]:
        return {"feature": self.feature.name, "method": request.method}

    async def _call(self, request) -> Any:
        method = getattr(self.repository, request.method)
        return await method(*request.args)


class ListByHandler(_MethodQueryHandler):
    kind = "list_by"

    async def execute(self, request: ListByQuery) -> list:
        return [self.feature.to_list_dto(e) for e in await self._call(request)]


class FindOneHandler(_MethodQueryHandler):
    kind = "find_one"

    async def execute(self, request: FindOneQuery) -> Any | None:
        entity = await self._call(request)
        if entity is None:
            return None
        return self.feature.to_details_dto(entity)


class ScalarHandler(_MethodQueryHandler):
    kind = "scalar"

    async def execute(self, request: ScalarQuery) -> Any:
        return await self._call(request)


# =================================================================================================================
# Commands
# =================================================================================================================

class CreateHandler(Handler):
    kind = "create"

    async def execute(self, request: CreateCommand) -> Any:
        entity = self.feature.from_create(request.payload)
        saved = await self.repository.add(entity)
        return self.feature.to_details_dto(saved)


class UpdateHandler(Handler):
    kind = "update"

    def _context(self, request: UpdateCommand) -> dict[str, Any]:
        return {"feature": self.feature.name, "id": str(request.id)}

    async def execute(self, request: UpdateCommand) -> Any | None:
        entity = await self.repository.get_by_id(request.id)
        if entity is None:
            logger.warning(
                "%s with ID %s not found or is already inactive",
                self.feature.entity_name, request.id,
                extra=self._context(request),
            )
            return None

        self.feature.apply_update(entity, request.payload)
        updated = await self.repository.update(entity)
        if updated is None:
            logger.warning(
                "%s with ID %s not found or is already inactive",
                self.feature.entity_name, request.id,
                extra=self._context(request),
            )
            return None
        return self.feature.to_details_dto(updated)


class DeleteHandler(Handler):
    kind = "delete"

    def _context(self, request: DeleteCommand) -> dict[str, Any]:
        return {"feature": self.feature.name, "id": str(request.id)}

    async def execute(self, request: DeleteCommand) -> bool:
        deleted = await self.repository.delete(request.id, request.modified_by)
        if not deleted:
            logger.warning(
                "%s with ID %s not found or is already inactive",
                self.feature.entity_name, request.id,
                extra=self._context(request),
            )
        return deleted


# =================================================================================================================
# Junctions
# =================================================================================================================

class _LinkHandlerBase(Handler):

    def _context(self, request) -> dict[str, Any]:
        return {
            "feature": self.feature.name,
            "first_id": str(request.first_id),
            "second_id": str(request.second_id),
        }


class LinkHandler(_LinkHandlerBase):
    kind = "link"

    async def execute(self, request: LinkCommand) -> bool:
        await self.repository.add(request.first_id, request.second_id)
        return True


class UnlinkHandler(_LinkHandlerBase):
    kind = "unlink"

    async def execute(self, request: UnlinkCommand) -> bool:
        removed = await self.repository.delete(request.first_id, request.second_id)
        if not removed:
            logger.warning(
                "%s link %s/%s not found or is already inactive",
                self.feature.name, request.first_id, request.second_id,
                extra=self._context(request),
            )
        return removed


class ListLinksHandler(_LinkHandlerBase):
    kind = "list_links"

    async def execute(self, request: ListLinksQuery) -> list:
        repo = self.repository
        if request.first_id is not None:
            rows = await repo.get_by_first_id(request.first_id)
            return [getattr(row, repo.second_field) for row in rows]
        rows = await repo.get_by_second_id(request.second_id)
        return [getattr(row, repo.first_field) for row in rows]


HANDLERS: dict[type[Request], type[Handler]] = {
    GetAllQuery: GetAllHandler,
    GetPagedQuery: GetPagedHandler,
    GetByIdQuery: GetByIdHandler,
    ListByQuery: ListByHandler,
    FindOneQuery: FindOneHandler,
    ScalarQuery: ScalarHandler,
    CreateCommand: CreateHandler,
    UpdateCommand: UpdateHandler,
    DeleteCommand: DeleteHandler,
    LinkCommand: LinkHandler,
    UnlinkCommand: UnlinkHandler,
    ListLinksQuery: ListLinksHandler,
}
