from datetime import datetime
from uuid import UUID

from .common import AuditDto, CamelModel


class UserDto(CamelModel):
    """Never carries the password hash."""
    user_id: UUID
    login_name: str
    last_login: datetime | None = None


class UserListDto(CamelModel):
    user: UserDto


class UserDetailsDto(UserListDto):
    audit: AuditDto


class CreateUserCommand(CamelModel):
    user_id: UUID | None = None
    login_name: str | None = None
    # plain text on the way in; hashed by the mapping before it reaches the model
    login_password: str | None = None
    created_by: UUID | None = None


class UpdateUserCommand(CamelModel):
    user_id: UUID | None = None
    login_name: str | None = None
    # omitted keeps the current password
    login_password: str | None = None
    modified_by: UUID | None = None
