from crm.models.activity import Activity
from crm.schemas.activity import (
    ActivityDetailsDto,
    ActivityDto,
    ActivityListDto,
    CreateActivityCommand,
    UpdateActivityCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


def to_dto(entity: Activity) -> ActivityDto:
    return ActivityDto(
        activity_id=entity.activity_id,
        activity_type_id=entity.activity_type_id,
        activity_status_id=entity.activity_status_id,
        assigned_user_id=entity.assigned_user_id,
        assigned_team_id=entity.assigned_team_id,
        subject=entity.subject,
        description=entity.description,
        due_date=entity.due_date,
        start_date=entity.start_date,
        completed_date=entity.completed_date,
        completed_by=entity.completed_by,
        is_completed=entity.completed_date is not None,
    )


def to_list_dto(entity: Activity) -> ActivityListDto:
    return ActivityListDto(
        activity=to_dto(entity),
        activity_type_name=label_of(entity.activity_type),
        activity_status_name=label_of(entity.activity_status),
    )


def to_details_dto(entity: Activity) -> ActivityDetailsDto:
    return ActivityDetailsDto(
        activity=to_dto(entity),
        activity_type_name=label_of(entity.activity_type),
        activity_status_name=label_of(entity.activity_status),
        audit=audit_dto(entity),
    )


def _copy_fields(entity: Activity, command) -> Activity:
    entity.activity_type_id = command.activity_type_id
    entity.activity_status_id = command.activity_status_id
    entity.assigned_user_id = command.assigned_user_id
    entity.assigned_team_id = command.assigned_team_id
    entity.subject = command.subject
    entity.description = command.description
    entity.due_date = command.due_date
    entity.start_date = command.start_date
    entity.completed_date = command.completed_date
    entity.completed_by = command.completed_by
    return entity


def from_create(command: CreateActivityCommand) -> Activity:
    entity = Activity(activity_id=new_id(command.activity_id))
    _copy_fields(entity, command)
    return stamp_create(entity, command.created_by)


def apply_update(entity: Activity, command: UpdateActivityCommand) -> Activity:
    _copy_fields(entity, command)
    return stamp_update(entity, command.modified_by)
