from crm.models.quote import Quote, QuoteLineItem
from crm.repositories.quote_repository import line_total
from crm.schemas.quote import (
    CreateQuoteCommand,
    CreateQuoteLineItemCommand,
    QuoteDetailsDto,
    QuoteDto,
    QuoteLineItemDetailsDto,
    QuoteLineItemDto,
    QuoteLineItemListDto,
    QuoteListDto,
    UpdateQuoteCommand,
    UpdateQuoteLineItemCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


# --- Quote ---

def to_dto(entity: Quote) -> QuoteDto:
    return QuoteDto(quote_id=entity.quote_id, quote_status_id=entity.quote_status_id, number=entity.number)


def to_list_dto(entity: Quote) -> QuoteListDto:
    return QuoteListDto(quote=to_dto(entity), quote_status_name=label_of(entity.quote_status))


def to_details_dto(entity: Quote) -> QuoteDetailsDto:
    return QuoteDetailsDto(
        quote=to_dto(entity),
        quote_status_name=label_of(entity.quote_status),
        audit=audit_dto(entity),
    )


def from_create(command: CreateQuoteCommand) -> Quote:
    entity = Quote(
        quote_id=new_id(command.quote_id),
        quote_status_id=command.quote_status_id,
        number=command.number.strip(),
    )
    return stamp_create(entity, command.created_by)


def apply_update(entity: Quote, command: UpdateQuoteCommand) -> Quote:
    entity.quote_status_id = command.quote_status_id
    entity.number = command.number.strip()
    return stamp_update(entity, command.modified_by)


# --- QuoteLineItem ---

def line_to_dto(entity: QuoteLineItem) -> QuoteLineItemDto:
    return QuoteLineItemDto(
        quote_line_item_id=entity.quote_line_item_id,
        quote_id=entity.quote_id,
        product_id=entity.product_id,
        description=entity.description,
        quantity=entity.quantity,
        unit_price=entity.unit_price,
        discount_percentage=entity.discount_percentage,
        discount_amount=entity.discount_amount,
        tax_percentage=entity.tax_percentage,
        line_number=entity.line_number,
        notes=entity.notes,
    )


def line_to_list_dto(entity: QuoteLineItem) -> QuoteLineItemListDto:
    return QuoteLineItemListDto(quote_line_item=line_to_dto(entity), line_total=line_total(entity))


def line_to_details_dto(entity: QuoteLineItem) -> QuoteLineItemDetailsDto:
    return QuoteLineItemDetailsDto(
        quote_line_item=line_to_dto(entity),
        line_total=line_total(entity),
        audit=audit_dto(entity),
    )


def _copy_line(entity: QuoteLineItem, command) -> QuoteLineItem:
    entity.quote_id = command.quote_id
    entity.product_id = command.product_id
    entity.description = command.description
    entity.quantity = command.quantity
    entity.unit_price = command.unit_price
    entity.discount_percentage = command.discount_percentage
    entity.discount_amount = command.discount_amount
    entity.tax_percentage = command.tax_percentage
    entity.line_number = command.line_number
    entity.notes = command.notes
    return entity


def line_from_create(command: CreateQuoteLineItemCommand) -> QuoteLineItem:
    entity = QuoteLineItem(quote_line_item_id=new_id(command.quote_line_item_id))
    _copy_line(entity, command)
    return stamp_create(entity, command.created_by)


def line_apply_update(entity: QuoteLineItem, command: UpdateQuoteLineItemCommand) -> QuoteLineItem:
    _copy_line(entity, command)
    return stamp_update(entity, command.modified_by)
