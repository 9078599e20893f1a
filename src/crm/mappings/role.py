from crm.models.role import Role
from crm.schemas.role import CreateRoleCommand, RoleDetailsDto, RoleDto, RoleListDto, UpdateRoleCommand
from .common import audit_dto, new_id, stamp_create, stamp_update


def to_dto(entity: Role) -> RoleDto:
    return RoleDto(role_id=entity.role_id, name=entity.name, description=entity.description)


def to_list_dto(entity: Role) -> RoleListDto:
    return RoleListDto(role=to_dto(entity))


def to_details_dto(entity: Role) -> RoleDetailsDto:
    return RoleDetailsDto(role=to_dto(entity), audit=audit_dto(entity))


def from_create(command: CreateRoleCommand) -> Role:
    entity = Role(role_id=new_id(command.role_id), name=command.name.strip(), description=command.description)
    return stamp_create(entity, command.created_by)


def apply_update(entity: Role, command: UpdateRoleCommand) -> Role:
    entity.name = command.name.strip()
    entity.description = command.description
    return stamp_update(entity, command.modified_by)
