from datetime import datetime
from uuid import UUID

from .common import AuditDto, CamelModel, Money, UtcDateTime


class PaymentDto(CamelModel):
    payment_id: UUID
    invoice_id: UUID
    payment_method_id: UUID
    payment_date: datetime
    amount: Money
    reference_number: str | None = None
    notes: str | None = None


class PaymentListDto(CamelModel):
    payment: PaymentDto
    payment_method_name: str | None = None


class PaymentDetailsDto(PaymentListDto):
    audit: AuditDto


class _PaymentFields(CamelModel):
    invoice_id: UUID | None = None
    payment_method_id: UUID | None = None
    payment_date: UtcDateTime | None = None
    amount: Money | None = None
    reference_number: str | None = None
    notes: str | None = None


class CreatePaymentCommand(_PaymentFields):
    payment_id: UUID | None = None
    created_by: UUID | None = None


class UpdatePaymentCommand(_PaymentFields):
    payment_id: UUID | None = None
    modified_by: UUID | None = None


class PaymentLineItemDto(CamelModel):
    payment_line_item_id: UUID
    payment_id: UUID
    invoice_id: UUID
    amount: Money
    description: str | None = None
    notes: str | None = None


class PaymentLineItemListDto(CamelModel):
    payment_line_item: PaymentLineItemDto


class PaymentLineItemDetailsDto(PaymentLineItemListDto):
    audit: AuditDto


class _PaymentLineItemFields(CamelModel):
    payment_id: UUID | None = None
    invoice_id: UUID | None = None
    amount: Money | None = None
    description: str | None = None
    notes: str | None = None


class CreatePaymentLineItemCommand(_PaymentLineItemFields):
    payment_line_item_id: UUID | None = None
    created_by: UUID | None = None


class UpdatePaymentLineItemCommand(_PaymentLineItemFields):
    payment_line_item_id: UUID | None = None
    modified_by: UUID | None = None
