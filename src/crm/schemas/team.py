from uuid import UUID

from .common import AuditDto, CamelModel


class TeamDto(CamelModel):
    team_id: UUID
    team_lead_user_id: UUID | None = None
    name: str
    description: str | None = None


class TeamListDto(CamelModel):
    team: TeamDto


class TeamDetailsDto(TeamListDto):
    audit: AuditDto


class _TeamFields(CamelModel):
    team_lead_user_id: UUID | None = None
    name: str | None = None
    description: str | None = None


class CreateTeamCommand(_TeamFields):
    team_id: UUID | None = None
    created_by: UUID | None = None


class UpdateTeamCommand(_TeamFields):
    team_id: UUID | None = None
    modified_by: UUID | None = None
