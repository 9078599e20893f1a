from uuid import UUID

from .common import AuditDto, CamelModel


class RoleDto(CamelModel):
    role_id: UUID
    name: str
    description: str | None = None


class RoleListDto(CamelModel):
    role: RoleDto


class RoleDetailsDto(RoleListDto):
    audit: AuditDto


class _RoleFields(CamelModel):
    name: str | None = None
    description: str | None = None


class CreateRoleCommand(_RoleFields):
    role_id: UUID | None = None
    created_by: UUID | None = None


class UpdateRoleCommand(_RoleFields):
    role_id: UUID | None = None
    modified_by: UUID | None = None
