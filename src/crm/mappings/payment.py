from crm.models.payment import Payment, PaymentLineItem
from crm.schemas.payment import (
    CreatePaymentCommand,
    CreatePaymentLineItemCommand,
    PaymentDetailsDto,
    PaymentDto,
    PaymentLineItemDetailsDto,
    PaymentLineItemDto,
    PaymentLineItemListDto,
    PaymentListDto,
    UpdatePaymentCommand,
    UpdatePaymentLineItemCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


# --- Payment ---

def to_dto(entity: Payment) -> PaymentDto:
    return PaymentDto(
        payment_id=entity.payment_id,
        invoice_id=entity.invoice_id,
        payment_method_id=entity.payment_method_id,
        payment_date=entity.payment_date,
        amount=entity.amount,
        reference_number=entity.reference_number,
        notes=entity.notes,
    )


def to_list_dto(entity: Payment) -> PaymentListDto:
    return PaymentListDto(payment=to_dto(entity), payment_method_name=label_of(entity.payment_method))


def to_details_dto(entity: Payment) -> PaymentDetailsDto:
    return PaymentDetailsDto(
        payment=to_dto(entity),
        payment_method_name=label_of(entity.payment_method),
        audit=audit_dto(entity),
    )


def _copy_payment(entity: Payment, command) -> Payment:
    entity.invoice_id = command.invoice_id
    entity.payment_method_id = command.payment_method_id
    entity.payment_date = command.payment_date
    entity.amount = command.amount
    entity.reference_number = command.reference_number
    entity.notes = command.notes
    return entity


def from_create(command: CreatePaymentCommand) -> Payment:
    entity = Payment(payment_id=new_id(command.payment_id))
    _copy_payment(entity, command)
    return stamp_create(entity, command.created_by)


def apply_update(entity: Payment, command: UpdatePaymentCommand) -> Payment:
    _copy_payment(entity, command)
    return stamp_update(entity, command.modified_by)


# --- PaymentLineItem ---

def line_to_dto(entity: PaymentLineItem) -> PaymentLineItemDto:
    return PaymentLineItemDto(
        payment_line_item_id=entity.payment_line_item_id,
        payment_id=entity.payment_id,
        invoice_id=entity.invoice_id,
        amount=entity.amount,
        description=entity.description,
        notes=entity.notes,
    )


def line_to_list_dto(entity: PaymentLineItem) -> PaymentLineItemListDto:
    return PaymentLineItemListDto(payment_line_item=line_to_dto(entity))


def line_to_details_dto(entity: PaymentLineItem) -> PaymentLineItemDetailsDto:
    return PaymentLineItemDetailsDto(payment_line_item=line_to_dto(entity), audit=audit_dto(entity))


def _copy_line(entity: PaymentLineItem, command) -> PaymentLineItem:
    entity.payment_id = command.payment_id
    entity.invoice_id = command.invoice_id
    entity.amount = command.amount
    entity.description = command.description
    entity.notes = command.notes
    return entity


def line_from_create(command: CreatePaymentLineItemCommand) -> PaymentLineItem:
    entity = PaymentLineItem(payment_line_item_id=new_id(command.payment_line_item_id))
    _copy_line(entity, command)
    return stamp_create(entity, command.created_by)


def line_apply_update(entity: PaymentLineItem, command: UpdatePaymentLineItemCommand) -> PaymentLineItem:
    _copy_line(entity, command)
    return stamp_update(entity, command.modified_by)
