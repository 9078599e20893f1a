"""
Validators for the sales-side features: companies, products, quotes, sales
orders, invoices and payments.
"""
from decimal import Decimal

from crm.schemas.company import CreateCompanyCommand, UpdateCompanyCommand
from crm.schemas.invoice import CreateInvoiceCommand, UpdateInvoiceCommand
from crm.schemas.payment import (
    CreatePaymentCommand,
    CreatePaymentLineItemCommand,
    UpdatePaymentCommand,
    UpdatePaymentLineItemCommand,
)
from crm.schemas.product import CreateProductCommand, UpdateProductCommand
from crm.schemas.quote import (
    CreateQuoteCommand,
    CreateQuoteLineItemCommand,
    UpdateQuoteCommand,
    UpdateQuoteLineItemCommand,
)
from crm.schemas.sales_order import CreateSalesOrderCommand, UpdateSalesOrderCommand
from .rules import (
    collect,
    in_range,
    max_length,
    non_negative,
    not_after,
    optional_id,
    positive,
    required_id,
    required_text,
    required_value,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _create_audit(command) -> str | None:
    return required_id(command.created_by, "Created by is required.")


def _update_audit(command) -> str | None:
    return required_id(command.modified_by, "Modified by is required.")


# --- Company ---

def _company_rules(command) -> list[str | None]:
    return [
        required_text(command.name, "Company name is required."),
        max_length(command.name, 200, "Company name cannot exceed 200 characters."),
        max_length(command.description, 2000, "Description cannot exceed 2000 characters."),
        max_length(command.website, 255, "Website cannot exceed 255 characters."),
        required_id(command.account_type_id, "Account type is required."),
        required_id(command.account_status_id, "Account status is required."),
        optional_id(command.parent_company_id, "Parent company must be a valid company ID."),
    ]


def validate_create_company(command: CreateCompanyCommand) -> list[str]:
    return collect(
        optional_id(command.company_id, "Company ID is required."),
        *_company_rules(command),
        _create_audit(command),
    )


def validate_update_company(command: UpdateCompanyCommand) -> list[str]:
    rules = _company_rules(command)
    if command.parent_company_id is not None and command.parent_company_id == command.company_id:
        rules.append("A company cannot be its own parent.")
    return collect(
        required_id(command.company_id, "Company ID is required."),
        *rules,
        _update_audit(command),
    )


# --- Product ---

def _product_rules(command) -> list[str | None]:
    return [
        required_id(command.product_type_id, "Product type is required."),
        required_text(command.name, "Product name is required."),
        max_length(command.name, 100, "Product name cannot exceed 100 characters."),
        max_length(command.description, 2000, "Description cannot exceed 2000 characters."),
    ]


def validate_create_product(command: CreateProductCommand) -> list[str]:
    return collect(optional_id(command.product_id, "Product ID is required."), *_product_rules(command), _create_audit(command))


def validate_update_product(command: UpdateProductCommand) -> list[str]:
    return collect(required_id(command.product_id, "Product ID is required."), *_product_rules(command), _update_audit(command))


# --- Quote ---

def _quote_rules(command) -> list[str | None]:
    return [
        required_id(command.quote_status_id, "Quote status is required."),
        required_text(command.number, "Quote number is required."),
        max_length(command.number, 50, "Quote number cannot exceed 50 characters."),
    ]


def validate_create_quote(command: CreateQuoteCommand) -> list[str]:
    return collect(optional_id(command.quote_id, "Quote ID is required."), *_quote_rules(command), _create_audit(command))


def validate_update_quote(command: UpdateQuoteCommand) -> list[str]:
    return collect(required_id(command.quote_id, "Quote ID is required."), *_quote_rules(command), _update_audit(command))


def _quote_line_rules(command) -> list[str | None]:
    return [
        required_id(command.quote_id, "Quote is required."),
        optional_id(command.product_id, "Product must be a valid product ID."),
        required_text(command.description, "Description is required."),
        max_length(command.description, 500, "Description cannot exceed 500 characters."),
        positive(command.quantity, "Quantity must be greater than zero."),
        required_value(command.unit_price, "Unit price is required."),
        non_negative(command.unit_price, "Unit price must be a non-negative number."),
        in_range(command.discount_percentage, ZERO, HUNDRED, "Discount percentage must be between 0 and 100."),
        non_negative(command.discount_amount, "Discount amount must be a non-negative number."),
        in_range(command.tax_percentage, ZERO, HUNDRED, "Tax percentage must be between 0 and 100."),
        required_value(command.line_number, "Line number is required."),
        positive(command.line_number, "Line number must be greater than zero."),
    ]


def validate_create_quote_line_item(command: CreateQuoteLineItemCommand) -> list[str]:
    return collect(
        optional_id(command.quote_line_item_id, "Quote line item ID is required."),
        *_quote_line_rules(command),
        _create_audit(command),
    )


def validate_update_quote_line_item(command: UpdateQuoteLineItemCommand) -> list[str]:
    return collect(
        required_id(command.quote_line_item_id, "Quote line item ID is required."),
        *_quote_line_rules(command),
        _update_audit(command),
    )


# --- SalesOrder ---

def _sales_order_rules(command) -> list[str | None]:
    return [
        required_id(command.sales_order_status_id, "Sales order status is required."),
        optional_id(command.quote_id, "Quote must be a valid quote ID."),
        required_text(command.number, "Sales order number is required."),
        max_length(command.number, 50, "Sales order number cannot exceed 50 characters."),
        required_value(command.order_date, "Order date is required."),
        not_after(command.order_date, command.due_date, "Order date must be before or equal to due date."),
        non_negative(command.subtotal, "Subtotal must be a non-negative number."),
        non_negative(command.tax_amount, "Tax amount must be a non-negative number."),
        non_negative(command.total_discount, "Total discount must be a non-negative number."),
        non_negative(command.due_amount, "Due amount must be a non-negative number."),
    ]


def validate_create_sales_order(command: CreateSalesOrderCommand) -> list[str]:
    return collect(
        optional_id(command.sales_order_id, "Sales order ID is required."),
        *_sales_order_rules(command),
        _create_audit(command),
    )


def validate_update_sales_order(command: UpdateSalesOrderCommand) -> list[str]:
    return collect(
        required_id(command.sales_order_id, "Sales order ID is required."),
        *_sales_order_rules(command),
        _update_audit(command),
    )


# --- Invoice ---

def _invoice_rules(command) -> list[str | None]:
    return [
        optional_id(command.sales_order_id, "Sales order must be a valid sales order ID."),
        optional_id(command.invoice_status_id, "Invoice status must be a valid ID."),
        required_text(command.number, "Invoice number is required."),
        max_length(command.number, 50, "Invoice number cannot exceed 50 characters."),
        not_after(command.invoice_date, command.due_date, "Invoice date must be before or equal to due date."),
    ]


def validate_create_invoice(command: CreateInvoiceCommand) -> list[str]:
    return collect(optional_id(command.invoice_id, "Invoice ID is required."), *_invoice_rules(command), _create_audit(command))


def validate_update_invoice(command: UpdateInvoiceCommand) -> list[str]:
    return collect(required_id(command.invoice_id, "Invoice ID is required."), *_invoice_rules(command), _update_audit(command))


# --- Payment ---

def _payment_rules(command) -> list[str | None]:
    return [
        required_id(command.invoice_id, "Invoice is required."),
        required_id(command.payment_method_id, "Payment method is required."),
        required_value(command.payment_date, "Payment date is required."),
        required_value(command.amount, "Amount is required."),
        positive(command.amount, "Amount must be greater than zero."),
        max_length(command.reference_number, 100, "Reference number cannot exceed 100 characters."),
        max_length(command.notes, 2000, "Notes cannot exceed 2000 characters."),
    ]


def validate_create_payment(command: CreatePaymentCommand) -> list[str]:
    return collect(optional_id(command.payment_id, "Payment ID is required."), *_payment_rules(command), _create_audit(command))


def validate_update_payment(command: UpdatePaymentCommand) -> list[str]:
    return collect(required_id(command.payment_id, "Payment ID is required."), *_payment_rules(command), _update_audit(command))


def _payment_line_rules(command) -> list[str | None]:
    return [
        required_id(command.payment_id, "Payment is required."),
        required_id(command.invoice_id, "Invoice is required."),
        required_value(command.amount, "Amount is required."),
        positive(command.amount, "Amount must be greater than zero."),
        max_length(command.description, 500, "Description cannot exceed 500 characters."),
        max_length(command.notes, 2000, "Notes cannot exceed 2000 characters."),
    ]


def validate_create_payment_line_item(command: CreatePaymentLineItemCommand) -> list[str]:
    return collect(
        optional_id(command.payment_line_item_id, "Payment line item ID is required."),
        *_payment_line_rules(command),
        _create_audit(command),
    )


def validate_update_payment_line_item(command: UpdatePaymentLineItemCommand) -> list[str]:
    return collect(
        required_id(command.payment_line_item_id, "Payment line item ID is required."),
        *_payment_line_rules(command),
        _update_audit(command),
    )
