from crm.models.company import Company
from crm.schemas.company import (
    CompanyDetailsDto,
    CompanyDto,
    CompanyListDto,
    CreateCompanyCommand,
    UpdateCompanyCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


def to_dto(entity: Company) -> CompanyDto:
    return CompanyDto(
        company_id=entity.company_id,
        parent_company_id=entity.parent_company_id,
        name=entity.name,
        description=entity.description,
        website=entity.website,
        account_type_id=entity.account_type_id,
        account_status_id=entity.account_status_id,
    )


def to_list_dto(entity: Company) -> CompanyListDto:
    return CompanyListDto(
        company=to_dto(entity),
        account_type_name=label_of(entity.account_type),
        account_status_name=label_of(entity.account_status),
    )


def to_details_dto(entity: Company) -> CompanyDetailsDto:
    return CompanyDetailsDto(
        company=to_dto(entity),
        account_type_name=label_of(entity.account_type),
        account_status_name=label_of(entity.account_status),
        audit=audit_dto(entity),
    )


def _copy_fields(entity: Company, command) -> Company:
    entity.parent_company_id = command.parent_company_id
    entity.name = command.name.strip()
    entity.description = command.description
    entity.website = command.website
    entity.account_type_id = command.account_type_id
    entity.account_status_id = command.account_status_id
    return entity


def from_create(command: CreateCompanyCommand) -> Company:
    entity = Company(company_id=new_id(command.company_id))
    _copy_fields(entity, command)
    return stamp_create(entity, command.created_by)


def apply_update(entity: Company, command: UpdateCompanyCommand) -> Company:
    _copy_fields(entity, command)
    return stamp_update(entity, command.modified_by)
