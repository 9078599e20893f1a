"""
Router factory.

`build_feature_router(feature)` turns one catalog entry into the standard set
of endpoints:

    GET    /{feature}                  list
    GET    /{feature}/<extension>      one per QueryRoute
    GET    /{feature}/paged            PagedResult
    GET    /{feature}/{id}             details or 404
    POST   /{feature}                  201 + details
    PUT    /{feature}/{id}             details or 404
    DELETE /{feature}/{id}             true or 404

Extension routes are registered before `/{id}` so that `/default` or
`/completed` are never parsed as an id. Every endpoint sends one request
through the mediator and wraps the result in `ApiResponse`.
"""

import inspect
import logging
import re
from decimal import Decimal
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel

from crm.api.dependencies import get_current_user, get_mediator
from crm.config.settings import get_settings
from crm.exceptions.base import BadRequestException, NotFoundException
from crm.handlers import (
    FEATURES,
    CreateCommand,
    DeleteCommand,
    FindOneQuery,
    GetAllQuery,
    GetByIdQuery,
    GetPagedQuery,
    LinkCommand,
    ListByQuery,
    ListLinksQuery,
    Mediator,
    ScalarQuery,
    UnlinkCommand,
    UpdateCommand,
)
from crm.handlers.features import Feature, JunctionFeature, QueryRoute
from crm.schemas.common import Money
from crm.schemas.envelope import ApiResponse

logger = logging.getLogger(__name__)

ID_MISMATCH_MESSAGE = "ID in the URL does not match the ID in the request body"

_PATH_PARAM_RE = re.compile(r"{(\w+)}")


def ok(data: Any = None) -> dict:
    if isinstance(data, Decimal):
        return ApiResponse[Money].ok(data).to_body()
    return ApiResponse.ok(data).to_body()


def _with_user(payload: BaseModel, field: str, user_id: UUID) -> BaseModel:
    """Fill `created_by` / `modified_by` from the token when the body leaves it out."""
    if getattr(payload, field, None) is None:
        return payload.model_copy(update={field: user_id})
    return payload


def _query_endpoint(feature: Feature, route: QueryRoute):
    """
    Build the endpoint for one extension route.

    The parameter list is only known at runtime, so the function takes
    `**params` and advertises the real parameters to FastAPI via `__signature__`.
    """
    path_names = set(_PATH_PARAM_RE.findall(route.path))
    request_types = {"list": ListByQuery, "one": FindOneQuery, "scalar": ScalarQuery}
    request_type = request_types[route.kind]

    async def endpoint(**params) -> dict:
        mediator: Mediator = params.pop("mediator")
        args = tuple(params[name] for name, _ in route.params)
        result = await mediator.send(request_type(feature.name, route.method, args))
        if route.kind == "one" and result is None:
            if args:
                raise NotFoundException(feature.entity_name, args[0])
            raise NotFoundException(feature.entity_name, message=f"No {route.path} {feature.entity_name} found")
        return ok(result)

    parameters = [
        inspect.Parameter(
            name,
            inspect.Parameter.KEYWORD_ONLY,
            annotation=annotation,
            default=Path() if name in path_names else Query(),
        )
        for name, annotation in route.params
    ]
    parameters.append(
        inspect.Parameter(
            "mediator",
            inspect.Parameter.KEYWORD_ONLY,
            annotation=Mediator,
            default=Depends(get_mediator),
        )
    )

    endpoint.__signature__ = inspect.Signature(parameters)
    endpoint.__name__ = f"{feature.name.replace('-', '_')}_{route.method}"
    return endpoint


def build_feature_router(feature: Feature) -> APIRouter:
    router = APIRouter(prefix=f"/{feature.name}", tags=[feature.name])
    name = feature.name
    id_field = feature.id_field
    create_schema = feature.create_schema
    update_schema = feature.update_schema

    @router.get("")
    async def get_all(mediator: Mediator = Depends(get_mediator)):
        return ok(await mediator.send(GetAllQuery(name)))

    for route in feature.queries:
        router.add_api_route(f"/{route.path}", _query_endpoint(feature, route), methods=["GET"])

    @router.get("/paged")
    async def get_paged(
        page_number: int = Query(1, alias="pageNumber"),
        page_size: int | None = Query(None, alias="pageSize"),
        mediator: Mediator = Depends(get_mediator),
    ):
        if page_size is None:
            page_size = get_settings().DEFAULT_PAGE_SIZE
        return ok(await mediator.send(GetPagedQuery(name, page_number, page_size)))

    @router.get("/{id}")
    async def get_by_id(id: UUID, mediator: Mediator = Depends(get_mediator)):
        dto = await mediator.send(GetByIdQuery(name, id))
        if dto is None:
            raise NotFoundException(feature.entity_name, id)
        return ok(dto)

    @router.post("", status_code=201)
    async def create(
        payload: create_schema,
        user_id: UUID = Depends(get_current_user),
        mediator: Mediator = Depends(get_mediator),
    ):
        payload = _with_user(payload, "created_by", user_id)
        return ok(await mediator.send(CreateCommand(name, payload)))

    @router.put("/{id}")
    async def update(
        id: UUID,
        payload: update_schema,
        user_id: UUID = Depends(get_current_user),
        mediator: Mediator = Depends(get_mediator),
    ):
        body_id = getattr(payload, id_field)
        if body_id is None:
            payload = payload.model_copy(update={id_field: id})
        elif body_id != id:
            raise BadRequestException(ID_MISMATCH_MESSAGE)
        payload = _with_user(payload, "modified_by", user_id)

        dto = await mediator.send(UpdateCommand(name, id, payload))
        if dto is None:
            raise NotFoundException(feature.entity_name, id)
        return ok(dto)

    @router.delete("/{id}")
    async def delete(
        id: UUID,
        user_id: UUID = Depends(get_current_user),
        mediator: Mediator = Depends(get_mediator),
    ):
        if not await mediator.send(DeleteCommand(name, id, user_id)):
            raise NotFoundException(feature.entity_name, id)
        return ok(True)

    return router


def build_junction_router(junction: JunctionFeature) -> APIRouter:
    router = APIRouter(tags=[junction.name])
    name = junction.name
    link_path = f"/{junction.first_segment}/{{first_id}}/{junction.second_segment}/{{second_id}}"

    @router.get(f"/{junction.first_segment}/{{first_id}}/{junction.second_segment}")
    async def list_second(first_id: UUID, mediator: Mediator = Depends(get_mediator)):
        return ok(await mediator.send(ListLinksQuery(name, first_id=first_id)))

    @router.get(f"/{junction.second_segment}/{{second_id}}/{junction.first_segment}")
    async def list_first(second_id: UUID, mediator: Mediator = Depends(get_mediator)):
        return ok(await mediator.send(ListLinksQuery(name, second_id=second_id)))

    @router.post(link_path, status_code=201)
    async def link(first_id: UUID, second_id: UUID, mediator: Mediator = Depends(get_mediator)):
        return ok(await mediator.send(LinkCommand(name, first_id, second_id)))

    @router.delete(link_path)
    async def unlink(first_id: UUID, second_id: UUID, mediator: Mediator = Depends(get_mediator)):
        if not await mediator.send(UnlinkCommand(name, first_id, second_id)):
            raise NotFoundException(
                f"{junction.first_name}{junction.second_name}", f"{first_id}/{second_id}"
            )
        return ok(True)

    return router


def build_api_router(features: dict[str, Feature | JunctionFeature] = FEATURES) -> APIRouter:
    """All feature routers, every route behind the bearer token."""
    router = APIRouter(dependencies=[Depends(get_current_user)])
    junctions = []
    for feature in features.values():
        if isinstance(feature, JunctionFeature):
            junctions.append(feature)
        else:
            router.include_router(build_feature_router(feature))
    for junction in junctions:
        router.include_router(build_junction_router(junction))
    logger.debug("api.routes.built", extra={"features": len(features)})
    return router
