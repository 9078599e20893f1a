from datetime import datetime
from decimal import Decimal
from uuid import UUID

from .common import AuditDto, CamelModel, Money, UtcDateTime


class SalesOrderDto(CamelModel):
    sales_order_id: UUID
    sales_order_status_id: UUID
    quote_id: UUID | None = None
    number: str
    order_date: datetime
    due_date: datetime | None = None
    ship_date: datetime | None = None
    subtotal: Money
    tax_amount: Money
    total_discount: Money
    due_amount: Money


class SalesOrderListDto(CamelModel):
    sales_order: SalesOrderDto
    sales_order_status_name: str | None = None


class SalesOrderDetailsDto(SalesOrderListDto):
    audit: AuditDto


class _SalesOrderFields(CamelModel):
    sales_order_status_id: UUID | None = None
    quote_id: UUID | None = None
    number: str | None = None
    order_date: UtcDateTime | None = None
    due_date: UtcDateTime | None = None
    ship_date: UtcDateTime | None = None
    subtotal: Money = Decimal("0")
    tax_amount: Money = Decimal("0")
    total_discount: Money = Decimal("0")
    due_amount: Money = Decimal("0")


class CreateSalesOrderCommand(_SalesOrderFields):
    sales_order_id: UUID | None = None
    created_by: UUID | None = None


class UpdateSalesOrderCommand(_SalesOrderFields):
    sales_order_id: UUID | None = None
    modified_by: UUID | None = None
