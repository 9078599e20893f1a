"""
Mapping for the type/status lookup features.

One `LookupMapping` per lookup model; the label is written to whichever column
the model names in `__label_field__`.
"""
from typing import Type

from sqlalchemy import inspect as sa_inspect

from crm.schemas.lookups import (
    CreateLookupCommand,
    LookupDetailsDto,
    LookupDto,
    UpdateLookupCommand,
)
from .common import audit_dto, new_id, stamp_create, stamp_update


class LookupMapping:

    def __init__(self, model: Type):
        self.model = model
        self.id_field = sa_inspect(model).primary_key[0].key

    def to_dto(self, entity) -> LookupDto:
        return LookupDto(
            id=getattr(entity, self.id_field),
            label=entity.label,
            description=entity.description,
            ordinal_position=entity.ordinal_position,
        )

    def to_list_dto(self, entity) -> LookupDto:
        return self.to_dto(entity)

    def to_details_dto(self, entity) -> LookupDetailsDto:
        return LookupDetailsDto(lookup=self.to_dto(entity), audit=audit_dto(entity))

    def from_create(self, command: CreateLookupCommand):
        entity = self.model()
        setattr(entity, self.id_field, new_id(command.id))
        entity.label = command.label.strip()
        entity.description = command.description
        entity.ordinal_position = command.ordinal_position
        return stamp_create(entity, command.created_by)

    def apply_update(self, entity, command: UpdateLookupCommand):
        entity.label = command.label.strip()
        entity.description = command.description
        entity.ordinal_position = command.ordinal_position
        return stamp_update(entity, command.modified_by)
