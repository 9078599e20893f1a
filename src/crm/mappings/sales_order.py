from crm.models.sales_order import SalesOrder
from crm.schemas.sales_order import (
    CreateSalesOrderCommand,
    SalesOrderDetailsDto,
    SalesOrderDto,
    SalesOrderListDto,
    UpdateSalesOrderCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


def to_dto(entity: SalesOrder) -> SalesOrderDto:
    return SalesOrderDto(
        sales_order_id=entity.sales_order_id,
        sales_order_status_id=entity.sales_order_status_id,
        quote_id=entity.quote_id,
        number=entity.number,
        order_date=entity.order_date,
        due_date=entity.due_date,
        ship_date=entity.ship_date,
        subtotal=entity.subtotal,
        tax_amount=entity.tax_amount,
        total_discount=entity.total_discount,
        due_amount=entity.due_amount,
    )


def to_list_dto(entity: SalesOrder) -> SalesOrderListDto:
    return SalesOrderListDto(
        sales_order=to_dto(entity),
        sales_order_status_name=label_of(entity.sales_order_status),
    )


def to_details_dto(entity: SalesOrder) -> SalesOrderDetailsDto:
    return SalesOrderDetailsDto(
        sales_order=to_dto(entity),
        sales_order_status_name=label_of(entity.sales_order_status),
        audit=audit_dto(entity),
    )


def _copy_fields(entity: SalesOrder, command) -> SalesOrder:
    entity.sales_order_status_id = command.sales_order_status_id
    entity.quote_id = command.quote_id
    entity.number = command.number.strip()
    entity.order_date = command.order_date
    entity.due_date = command.due_date
    entity.ship_date = command.ship_date
    entity.subtotal = command.subtotal
    entity.tax_amount = command.tax_amount
    entity.total_discount = command.total_discount
    entity.due_amount = command.due_amount
    return entity


def from_create(command: CreateSalesOrderCommand) -> SalesOrder:
    entity = SalesOrder(sales_order_id=new_id(command.sales_order_id))
    _copy_fields(entity, command)
    return stamp_create(entity, command.created_by)


def apply_update(entity: SalesOrder, command: UpdateSalesOrderCommand) -> SalesOrder:
    _copy_fields(entity, command)
    return stamp_update(entity, command.modified_by)
