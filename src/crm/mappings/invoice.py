from crm.models.invoice import Invoice
from crm.schemas.invoice import (
    CreateInvoiceCommand,
    InvoiceDetailsDto,
    InvoiceDto,
    InvoiceListDto,
    UpdateInvoiceCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


def to_dto(entity: Invoice) -> InvoiceDto:
    return InvoiceDto(
        invoice_id=entity.invoice_id,
        sales_order_id=entity.sales_order_id,
        invoice_status_id=entity.invoice_status_id,
        number=entity.number,
        invoice_date=entity.invoice_date,
        due_date=entity.due_date,
    )


def to_list_dto(entity: Invoice) -> InvoiceListDto:
    return InvoiceListDto(invoice=to_dto(entity), invoice_status_name=label_of(entity.invoice_status))


def to_details_dto(entity: Invoice) -> InvoiceDetailsDto:
    return InvoiceDetailsDto(
        invoice=to_dto(entity),
        invoice_status_name=label_of(entity.invoice_status),
        audit=audit_dto(entity),
    )


def _copy_fields(entity: Invoice, command) -> Invoice:
    entity.sales_order_id = command.sales_order_id
    entity.invoice_status_id = command.invoice_status_id
    entity.number = command.number.strip()
    entity.invoice_date = command.invoice_date
    entity.due_date = command.due_date
    return entity


def from_create(command: CreateInvoiceCommand) -> Invoice:
    entity = Invoice(invoice_id=new_id(command.invoice_id))
    _copy_fields(entity, command)
    return stamp_create(entity, command.created_by)


def apply_update(entity: Invoice, command: UpdateInvoiceCommand) -> Invoice:
    _copy_fields(entity, command)
    return stamp_update(entity, command.modified_by)
