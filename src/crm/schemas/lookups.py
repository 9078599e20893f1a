"""
DTOs and commands shared by all type/status lookup features.

The label is exposed under one name (`label`) whatever the underlying column
is called (`type`, `status` or `name`).
"""
from uuid import UUID

from .common import AuditDto, CamelModel


class LookupDto(CamelModel):
    id: UUID
    label: str
    description: str | None = None
    ordinal_position: int = 0


class LookupDetailsDto(CamelModel):
    lookup: LookupDto
    audit: AuditDto


class CreateLookupCommand(CamelModel):
    id: UUID | None = None
    label: str | None = None
    description: str | None = None
    ordinal_position: int = 0
    created_by: UUID | None = None


class UpdateLookupCommand(CamelModel):
    id: UUID | None = None
    label: str | None = None
    description: str | None = None
    ordinal_position: int = 0
    modified_by: UUID | None = None
