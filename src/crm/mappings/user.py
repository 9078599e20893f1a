"""
User mapping. Passwords are hashed here, so a plain-text password never
reaches the model or a DTO.
"""
from crm.models.user import User
from crm.schemas.user import CreateUserCommand, UpdateUserCommand, UserDetailsDto, UserDto, UserListDto
from crm.services.passwords import hash_password
from .common import audit_dto, new_id, stamp_create, stamp_update


def to_dto(entity: User) -> UserDto:
    return UserDto(user_id=entity.user_id, login_name=entity.login_name, last_login=entity.last_login)


def to_list_dto(entity: User) -> UserListDto:
    return UserListDto(user=to_dto(entity))


def to_details_dto(entity: User) -> UserDetailsDto:
    return UserDetailsDto(user=to_dto(entity), audit=audit_dto(entity))


def from_create(command: CreateUserCommand) -> User:
    entity = User(
        user_id=new_id(command.user_id),
        login_name=command.login_name.strip(),
        login_password=hash_password(command.login_password),
    )
    return stamp_create(entity, command.created_by)


def apply_update(entity: User, command: UpdateUserCommand) -> User:
    entity.login_name = command.login_name.strip()
    if command.login_password:
        entity.login_password = hash_password(command.login_password)
    return stamp_update(entity, command.modified_by)
