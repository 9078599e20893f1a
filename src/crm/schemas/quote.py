from decimal import Decimal
from uuid import UUID

from .common import AuditDto, CamelModel, Money


class QuoteDto(CamelModel):
    quote_id: UUID
    quote_status_id: UUID
    number: str


class QuoteListDto(CamelModel):
    quote: QuoteDto
    quote_status_name: str | None = None


class QuoteDetailsDto(QuoteListDto):
    audit: AuditDto


class _QuoteFields(CamelModel):
    quote_status_id: UUID | None = None
    number: str | None = None


class CreateQuoteCommand(_QuoteFields):
    quote_id: UUID | None = None
    created_by: UUID | None = None


class UpdateQuoteCommand(_QuoteFields):
    quote_id: UUID | None = None
    modified_by: UUID | None = None


class QuoteLineItemDto(CamelModel):
    quote_line_item_id: UUID
    quote_id: UUID
    product_id: UUID | None = None
    description: str
    quantity: Decimal
    unit_price: Money
    discount_percentage: Decimal | None = None
    discount_amount: Money | None = None
    tax_percentage: Decimal | None = None
    line_number: int
    notes: str | None = None


class QuoteLineItemListDto(CamelModel):
    quote_line_item: QuoteLineItemDto
    line_total: Money | None = None


class QuoteLineItemDetailsDto(QuoteLineItemListDto):
    audit: AuditDto


class _QuoteLineItemFields(CamelModel):
    quote_id: UUID | None = None
    product_id: UUID | None = None
    description: str | None = None
    quantity: Decimal = Decimal("1")
    unit_price: Money | None = None
    discount_percentage: Decimal | None = None
    discount_amount: Money | None = None
    tax_percentage: Decimal | None = None
    line_number: int | None = None
    notes: str | None = None


class CreateQuoteLineItemCommand(_QuoteLineItemFields):
    quote_line_item_id: UUID | None = None
    created_by: UUID | None = None


class UpdateQuoteLineItemCommand(_QuoteLineItemFields):
    quote_line_item_id: UUID | None = None
    modified_by: UUID | None = None
