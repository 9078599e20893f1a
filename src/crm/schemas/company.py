from uuid import UUID

from .common import AuditDto, CamelModel


class CompanyDto(CamelModel):
    company_id: UUID
    parent_company_id: UUID | None = None
    name: str
    description: str | None = None
    website: str | None = None
    account_type_id: UUID
    account_status_id: UUID


class CompanyListDto(CamelModel):
    company: CompanyDto
    account_type_name: str | None = None
    account_status_name: str | None = None


class CompanyDetailsDto(CompanyListDto):
    audit: AuditDto


class _CompanyFields(CamelModel):
    parent_company_id: UUID | None = None
    name: str | None = None
    description: str | None = None
    website: str | None = None
    account_type_id: UUID | None = None
    account_status_id: UUID | None = None


class CreateCompanyCommand(_CompanyFields):
    company_id: UUID | None = None
    created_by: UUID | None = None


class UpdateCompanyCommand(_CompanyFields):
    company_id: UUID | None = None
    modified_by: UUID | None = None
