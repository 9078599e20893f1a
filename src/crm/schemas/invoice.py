from datetime import datetime
from uuid import UUID

from .common import AuditDto, CamelModel, UtcDateTime


class InvoiceDto(CamelModel):
    invoice_id: UUID
    sales_order_id: UUID | None = None
    invoice_status_id: UUID | None = None
    number: str
    invoice_date: datetime | None = None
    due_date: datetime | None = None


class InvoiceListDto(CamelModel):
    invoice: InvoiceDto
    invoice_status_name: str | None = None


class InvoiceDetailsDto(InvoiceListDto):
    audit: AuditDto


class _InvoiceFields(CamelModel):
    sales_order_id: UUID | None = None
    invoice_status_id: UUID | None = None
    number: str | None = None
    invoice_date: UtcDateTime | None = None
    due_date: UtcDateTime | None = None


class CreateInvoiceCommand(_InvoiceFields):
    invoice_id: UUID | None = None
    created_by: UUID | None = None


class UpdateInvoiceCommand(_InvoiceFields):
    invoice_id: UUID | None = None
    modified_by: UUID | None = None
