"""
Mediator: validate, then dispatch.

Validators are registered per (request type, feature). All of them run and
their messages are concatenated in registration order; any message aborts the
request with `ValidationException` before a handler is even constructed.
"""
import logging
from collections import defaultdict
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from crm.exceptions.base import BadRequestException, ValidationException
from crm.validators.rules import collect, required_id
from .features import Feature, JunctionFeature
from .generic import HANDLERS, Handler
from .requests import (
    CreateCommand,
    DeleteCommand,
    GetByIdQuery,
    GetPagedQuery,
    LinkCommand,
    ListLinksQuery,
    Request,
    UnlinkCommand,
    UpdateCommand,
)

logger = logging.getLogger(__name__)

RequestValidator = Callable[[Request], list[str]]


class Mediator:
    """
    Usage:
        mediator = Mediator(session, FEATURES)
        dto = await mediator.send(GetByIdQuery("activities", activity_id))
    """

    def __init__(
        self,
        session: AsyncSession,
        features: dict[str, Feature | JunctionFeature],
        handlers: dict[type[Request], type[Handler]] | None = None,
    ):
        self.session = session
        self.features = features
        self.handlers = handlers if handlers is not None else HANDLERS
        self._validators: dict[tuple[type[Request], str], list[RequestValidator]] = defaultdict(list)
        for feature in features.values():
            self._register_defaults(feature)

    def register_validator(self, kind: type[Request], feature: str, validator: RequestValidator) -> None:
        self._validators[(kind, feature)].append(validator)

    def validators_for(self, kind: type[Request], feature: str) -> list[RequestValidator]:
        return list(self._validators.get((kind, feature), ()))

    def _register_defaults(self, feature: Feature | JunctionFeature) -> None:
        name = feature.name

        if isinstance(feature, JunctionFeature):
            def link_ids(request) -> list[str]:
                return collect(
                    required_id(request.first_id, f"{feature.first_name} ID is required."),
                    required_id(request.second_id, f"{feature.second_name} ID is required."),
                )

            def link_side(request: ListLinksQuery) -> list[str]:
                if request.first_id is None and request.second_id is None:
                    return [f"{feature.first_name} ID or {feature.second_name} ID is required."]
                return []

            self.register_validator(LinkCommand, name, link_ids)
            self.register_validator(UnlinkCommand, name, link_ids)
            self.register_validator(ListLinksQuery, name, link_side)
            return

        id_message = f"{feature.entity_name} ID is required."

        self.register_validator(CreateCommand, name, lambda r: feature.validate_create(r.payload))
        self.register_validator(UpdateCommand, name, lambda r: feature.validate_update(r.payload))
        self.register_validator(UpdateCommand, name, lambda r: collect(required_id(r.id, id_message)))
        self.register_validator(GetByIdQuery, name, lambda r: collect(required_id(r.id, id_message)))
        self.register_validator(DeleteCommand, name, lambda r: collect(required_id(r.id, id_message)))
        self.register_validator(GetPagedQuery, name, _validate_paging)

    def _validate(self, request: Request) -> list[str]:
        errors: list[str] = []
        for validator in self.validators_for(type(request), request.feature):
            # the same rule can be reached twice (URL id and body id)
            errors.extend(e for e in validator(request) if e not in errors)
        return errors

    async def send(self, request: Request) -> Any:
        feature = self.features.get(request.feature)
        if feature is None:
            raise BadRequestException(f"Unknown feature '{request.feature}'")

        errors = self._validate(request)
        if errors:
            logger.info(
                "mediator.validation_failed",
                extra={"feature": request.feature, "request": type(request).__name__, "errors": errors},
            )
            raise ValidationException(errors)

        handler_cls = self.handlers.get(type(request))
        if handler_cls is None:
            raise BadRequestException(f"No handler registered for {type(request).__name__}")

        handler = handler_cls(self.session, feature)
        return await handler.handle(request)


def _validate_paging(request: GetPagedQuery) -> list[str]:
    errors = []
    if request.page_number < 1:
        errors.append("Page number must be greater than zero.")
    if request.page_size < 1:
        errors.append("Page size must be greater than zero.")
    return errors
