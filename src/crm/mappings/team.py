from crm.models.team import Team
from crm.schemas.team import CreateTeamCommand, TeamDetailsDto, TeamDto, TeamListDto, UpdateTeamCommand
from .common import audit_dto, new_id, stamp_create, stamp_update


def to_dto(entity: Team) -> TeamDto:
    return TeamDto(
        team_id=entity.team_id,
        team_lead_user_id=entity.team_lead_user_id,
        name=entity.name,
        description=entity.description,
    )


def to_list_dto(entity: Team) -> TeamListDto:
    return TeamListDto(team=to_dto(entity))


def to_details_dto(entity: Team) -> TeamDetailsDto:
    return TeamDetailsDto(team=to_dto(entity), audit=audit_dto(entity))


def from_create(command: CreateTeamCommand) -> Team:
    entity = Team(
        team_id=new_id(command.team_id),
        team_lead_user_id=command.team_lead_user_id,
        name=command.name.strip(),
        description=command.description,
    )
    return stamp_create(entity, command.created_by)


def apply_update(entity: Team, command: UpdateTeamCommand) -> Team:
    entity.team_lead_user_id = command.team_lead_user_id
    entity.name = command.name.strip()
    entity.description = command.description
    return stamp_update(entity, command.modified_by)
