from datetime import datetime
from uuid import UUID

from .common import AuditDto, CamelModel, UtcDateTime


class ActivityDto(CamelModel):
    activity_id: UUID
    activity_type_id: UUID
    activity_status_id: UUID
    assigned_user_id: UUID | None = None
    assigned_team_id: UUID | None = None
    subject: str
    description: str | None = None
    due_date: datetime | None = None
    start_date: datetime | None = None
    completed_date: datetime | None = None
    completed_by: UUID | None = None
    is_completed: bool = False


class ActivityListDto(CamelModel):
    activity: ActivityDto
    activity_type_name: str | None = None
    activity_status_name: str | None = None


class ActivityDetailsDto(ActivityListDto):
    audit: AuditDto


class _ActivityFields(CamelModel):
    # Optional at the schema level so the validator can report every missing field
    activity_type_id: UUID | None = None
    activity_status_id: UUID | None = None
    assigned_user_id: UUID | None = None
    assigned_team_id: UUID | None = None
    subject: str | None = None
    description: str | None = None
    due_date: UtcDateTime | None = None
    start_date: UtcDateTime | None = None
    completed_date: UtcDateTime | None = None
    completed_by: UUID | None = None
    is_completed: bool = False


class CreateActivityCommand(_ActivityFields):
    activity_id: UUID | None = None
    created_by: UUID | None = None


class UpdateActivityCommand(_ActivityFields):
    activity_id: UUID | None = None
    modified_by: UUID | None = None
