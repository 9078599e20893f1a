from crm.database.base import utcnow
from crm.schemas.activity import CreateActivityCommand, UpdateActivityCommand
from .rules import (
    collect,
    max_length,
    optional_id,
    required_id,
    required_text,
    required_value,
    not_after,
)


def _common_rules(command) -> list[str | None]:
    today = utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    return [
        required_id(command.activity_type_id, "Activity type is required."),
        required_id(command.activity_status_id, "Activity status is required."),
        required_text(command.subject, "Subject is required."),
        max_length(command.subject, 200, "Subject cannot exceed 200 characters."),
        max_length(command.description, 2000, "Description cannot exceed 2000 characters."),
        (
            "Due date cannot be in the past for incomplete activities."
            if command.due_date is not None and not command.is_completed and command.due_date < today
            else None
        ),
        not_after(command.start_date, command.due_date, "Start date must be before or equal to due date."),
        (
            required_value(command.completed_date, "Completed date is required when activity is marked as completed.")
            if command.is_completed else None
        ),
        (
            required_id(command.completed_by, "Completed by is required when activity is marked as completed.")
            if command.is_completed else None
        ),
        optional_id(command.assigned_user_id, "Assigned user must be a valid user ID."),
        optional_id(command.assigned_team_id, "Assigned team must be a valid team ID."),
    ]


def validate_create_activity(command: CreateActivityCommand) -> list[str]:
    # the id may be omitted (one is assigned) but an explicit nil id is rejected
    return collect(
        optional_id(command.activity_id, "Activity ID is required."),
        *_common_rules(command),
        required_id(command.created_by, "Created by is required."),
    )


def validate_update_activity(command: UpdateActivityCommand) -> list[str]:
    return collect(
        required_id(command.activity_id, "Activity ID is required."),
        *_common_rules(command),
        required_id(command.modified_by, "Modified by is required."),
    )
