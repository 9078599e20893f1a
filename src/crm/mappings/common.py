"""
Helpers shared by every entity mapping.

Audit columns are only ever written here: `stamp_create` on insert and
`stamp_update` on update. Update mappings never touch `created_by`,
`created_date`, `active` or the id.
"""
import uuid
from uuid import UUID

from crm.database.base import next_modified_date, utcnow
from crm.schemas.common import AuditDto


def new_id(value: UUID | None) -> UUID:
    """Keep a client-supplied id, otherwise assign a fresh uuid4."""
    return value if value is not None else uuid.uuid4()


def stamp_create(entity, created_by: UUID):
    now = utcnow()
    entity.created_by = created_by
    entity.created_date = now
    entity.modified_by = created_by
    entity.modified_date = now
    entity.active = True
    return entity


def stamp_update(entity, modified_by: UUID):
    entity.modified_by = modified_by
    entity.modified_date = next_modified_date(entity.modified_date)
    return entity


def audit_dto(entity) -> AuditDto:
    return AuditDto(
        created_by=entity.created_by,
        created_date=entity.created_date,
        modified_by=entity.modified_by,
        modified_date=entity.modified_date,
        active=entity.active,
    )


def label_of(lookup) -> str | None:
    """Display name of an eagerly loaded lookup row, or None when unset."""
    return lookup.label if lookup is not None else None
