"""Validators for users, roles and teams."""
from crm.schemas.role import CreateRoleCommand, UpdateRoleCommand
from crm.schemas.team import CreateTeamCommand, UpdateTeamCommand
from crm.schemas.user import CreateUserCommand, UpdateUserCommand
from .rules import collect, max_length, optional_id, required_id, required_text

PASSWORD_MIN_LENGTH = 8


def _password_length(password: str | None) -> str | None:
    if password and len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters."
    return None


def validate_create_user(command: CreateUserCommand) -> list[str]:
    return collect(
        optional_id(command.user_id, "User ID is required."),
        required_text(command.login_name, "Login name is required."),
        max_length(command.login_name, 100, "Login name cannot exceed 100 characters."),
        required_text(command.login_password, "Password is required."),
        _password_length(command.login_password),
        required_id(command.created_by, "Created by is required."),
    )


def validate_update_user(command: UpdateUserCommand) -> list[str]:
    return collect(
        required_id(command.user_id, "User ID is required."),
        required_text(command.login_name, "Login name is required."),
        max_length(command.login_name, 100, "Login name cannot exceed 100 characters."),
        _password_length(command.login_password),
        required_id(command.modified_by, "Modified by is required."),
    )


def _named_rules(command, noun: str) -> list[str | None]:
    return [
        required_text(command.name, f"{noun} name is required."),
        max_length(command.name, 100, f"{noun} name cannot exceed 100 characters."),
        max_length(command.description, 500, "Description cannot exceed 500 characters."),
    ]


def validate_create_role(command: CreateRoleCommand) -> list[str]:
    return collect(
        optional_id(command.role_id, "Role ID is required."),
        *_named_rules(command, "Role"),
        required_id(command.created_by, "Created by is required."),
    )


def validate_update_role(command: UpdateRoleCommand) -> list[str]:
    return collect(
        required_id(command.role_id, "Role ID is required."),
        *_named_rules(command, "Role"),
        required_id(command.modified_by, "Modified by is required."),
    )


def validate_create_team(command: CreateTeamCommand) -> list[str]:
    return collect(
        optional_id(command.team_id, "Team ID is required."),
        *_named_rules(command, "Team"),
        optional_id(command.team_lead_user_id, "Team lead must be a valid user ID."),
        required_id(command.created_by, "Created by is required."),
    )


def validate_update_team(command: UpdateTeamCommand) -> list[str]:
    return collect(
        required_id(command.team_id, "Team ID is required."),
        *_named_rules(command, "Team"),
        optional_id(command.team_lead_user_id, "Team lead must be a valid user ID."),
        required_id(command.modified_by, "Modified by is required."),
    )
