"""
Feature catalog: the single list of everything the pipeline serves.

Adding an entity means adding a model, schemas, mapping and validator
functions, a repository, and one entry here; the router factory and the
mediator pick it up from `FEATURES`.
"""
from uuid import UUID

from crm import models
from crm.mappings import activity as activity_map
from crm.mappings import company as company_map
from crm.mappings import invoice as invoice_map
from crm.mappings import payment as payment_map
from crm.mappings import product as product_map
from crm.mappings import quote as quote_map
from crm.mappings import role as role_map
from crm.mappings import sales_order as sales_order_map
from crm.mappings import team as team_map
from crm.mappings import user as user_map
from crm.mappings.lookups import LookupMapping
from crm.repositories import (
    ActivityRepository,
    CompanyRepository,
    InvoiceRepository,
    LookupRepository,
    PaymentLineItemRepository,
    PaymentRepository,
    ProductRepository,
    QuoteLineItemRepository,
    QuoteRepository,
    RoleRepository,
    SalesOrderRepository,
    TeamRepository,
    TeamUserRepository,
    UserRepository,
    UserRoleRepository,
)
from crm.schemas import activity as activity_schemas
from crm.schemas import company as company_schemas
from crm.schemas import invoice as invoice_schemas
from crm.schemas import payment as payment_schemas
from crm.schemas import product as product_schemas
from crm.schemas import quote as quote_schemas
from crm.schemas import role as role_schemas
from crm.schemas import sales_order as sales_order_schemas
from crm.schemas import team as team_schemas
from crm.schemas import user as user_schemas
from crm.schemas.common import UtcDateTime
from crm.schemas.lookups import CreateLookupCommand, LookupDetailsDto, LookupDto, UpdateLookupCommand
from crm.validators import activity as activity_rules
from crm.validators import sales as sales_rules
from crm.validators import security as security_rules
from crm.validators.lookups import lookup_validators
from .features import Feature, JunctionFeature, QueryRoute

DATE_RANGE = (("start", UtcDateTime), ("end", UtcDateTime))


def _lookup_feature(name: str, display_name: str, model: type) -> Feature:
    mapping = LookupMapping(model)
    validate_create, validate_update = lookup_validators(display_name, model.__label_field__)
    return Feature(
        name=name,
        entity_name=model.__name__,
        model=model,
        repository=lambda db: LookupRepository(model, db),
        dto=LookupDto,
        list_dto=LookupDto,
        details_dto=LookupDetailsDto,
        create_schema=CreateLookupCommand,
        update_schema=UpdateLookupCommand,
        to_list_dto=mapping.to_list_dto,
        to_details_dto=mapping.to_details_dto,
        from_create=mapping.from_create,
        apply_update=mapping.apply_update,
        validate_create=validate_create,
        validate_update=validate_update,
        queries=(
            QueryRoute("default", "get_default", kind="one"),
            QueryRoute("by-ordinal-position", "get_by_ordinal_position"),
            QueryRoute("by-label/{label}", "get_by_label", params=(("label", str),)),
        ),
        is_lookup=True,
    )


LOOKUP_FEATURES = [
    _lookup_feature("account-types", "Account type", models.AccountType),
    _lookup_feature("account-statuses", "Account status", models.AccountStatus),
    _lookup_feature("activity-types", "Activity type", models.ActivityType),
    _lookup_feature("activity-statuses", "Activity status", models.ActivityStatus),
    _lookup_feature("invoice-statuses", "Invoice status", models.InvoiceStatus),
    _lookup_feature("payment-methods", "Payment method", models.PaymentMethod),
    _lookup_feature("quote-statuses", "Quote status", models.QuoteStatus),
    _lookup_feature("sales-order-statuses", "Sales order status", models.SalesOrderStatus),
    _lookup_feature("product-types", "Product type", models.ProductType),
    _lookup_feature("service-types", "Service type", models.ServiceType),
]


BUSINESS_FEATURES = [
    Feature(
        name="activities",
        entity_name="Activity",
        model=models.Activity,
        repository=ActivityRepository,
        dto=activity_schemas.ActivityDto,
        list_dto=activity_schemas.ActivityListDto,
        details_dto=activity_schemas.ActivityDetailsDto,
        create_schema=activity_schemas.CreateActivityCommand,
        update_schema=activity_schemas.UpdateActivityCommand,
        to_list_dto=activity_map.to_list_dto,
        to_details_dto=activity_map.to_details_dto,
        from_create=activity_map.from_create,
        apply_update=activity_map.apply_update,
        validate_create=activity_rules.validate_create_activity,
        validate_update=activity_rules.validate_update_activity,
        queries=(
            QueryRoute("by-type/{activity_type_id}", "get_by_activity_type", params=(("activity_type_id", UUID),)),
            QueryRoute("by-status/{activity_status_id}", "get_by_activity_status", params=(("activity_status_id", UUID),)),
            QueryRoute("by-assigned-user/{user_id}", "get_by_assigned_user", params=(("user_id", UUID),)),
            QueryRoute("by-assigned-team/{team_id}", "get_by_assigned_team", params=(("team_id", UUID),)),
            QueryRoute("by-due-date-range", "get_by_due_date_range", params=DATE_RANGE),
            QueryRoute("completed", "get_completed"),
            QueryRoute("incomplete", "get_incomplete"),
        ),
    ),
    Feature(
        name="companies",
        entity_name="Company",
        model=models.Company,
        repository=CompanyRepository,
        dto=company_schemas.CompanyDto,
        list_dto=company_schemas.CompanyListDto,
        details_dto=company_schemas.CompanyDetailsDto,
        create_schema=company_schemas.CreateCompanyCommand,
        update_schema=company_schemas.UpdateCompanyCommand,
        to_list_dto=company_map.to_list_dto,
        to_details_dto=company_map.to_details_dto,
        from_create=company_map.from_create,
        apply_update=company_map.apply_update,
        validate_create=sales_rules.validate_create_company,
        validate_update=sales_rules.validate_update_company,
        queries=(
            QueryRoute("by-account-type/{account_type_id}", "get_by_account_type", params=(("account_type_id", UUID),)),
            QueryRoute("by-account-status/{account_status_id}", "get_by_account_status", params=(("account_status_id", UUID),)),
            QueryRoute("children/{parent_company_id}", "get_children", params=(("parent_company_id", UUID),)),
            QueryRoute("search", "search_by_name", params=(("term", str),)),
        ),
    ),
    Feature(
        name="invoices",
        entity_name="Invoice",
        model=models.Invoice,
        repository=InvoiceRepository,
        dto=invoice_schemas.InvoiceDto,
        list_dto=invoice_schemas.InvoiceListDto,
        details_dto=invoice_schemas.InvoiceDetailsDto,
        create_schema=invoice_schemas.CreateInvoiceCommand,
        update_schema=invoice_schemas.UpdateInvoiceCommand,
        to_list_dto=invoice_map.to_list_dto,
        to_details_dto=invoice_map.to_details_dto,
        from_create=invoice_map.from_create,
        apply_update=invoice_map.apply_update,
        validate_create=sales_rules.validate_create_invoice,
        validate_update=sales_rules.validate_update_invoice,
        queries=(
            QueryRoute("by-sales-order/{sales_order_id}", "get_by_sales_order", params=(("sales_order_id", UUID),)),
            QueryRoute("by-number/{number}", "get_by_number", kind="one", params=(("number", str),)),
        ),
    ),
    Feature(
        name="payments",
        entity_name="Payment",
        model=models.Payment,
        repository=PaymentRepository,
        dto=payment_schemas.PaymentDto,
        list_dto=payment_schemas.PaymentListDto,
        details_dto=payment_schemas.PaymentDetailsDto,
        create_schema=payment_schemas.CreatePaymentCommand,
        update_schema=payment_schemas.UpdatePaymentCommand,
        to_list_dto=payment_map.to_list_dto,
        to_details_dto=payment_map.to_details_dto,
        from_create=payment_map.from_create,
        apply_update=payment_map.apply_update,
        validate_create=sales_rules.validate_create_payment,
        validate_update=sales_rules.validate_update_payment,
        queries=(
            QueryRoute("by-invoice/{invoice_id}", "get_by_invoice", params=(("invoice_id", UUID),)),
            QueryRoute("by-payment-method/{payment_method_id}", "get_by_payment_method", params=(("payment_method_id", UUID),)),
            QueryRoute("by-date-range", "get_by_date_range", params=DATE_RANGE),
        ),
    ),
    Feature(
        name="payment-line-items",
        entity_name="PaymentLineItem",
        model=models.PaymentLineItem,
        repository=PaymentLineItemRepository,
        dto=payment_schemas.PaymentLineItemDto,
        list_dto=payment_schemas.PaymentLineItemListDto,
        details_dto=payment_schemas.PaymentLineItemDetailsDto,
        create_schema=payment_schemas.CreatePaymentLineItemCommand,
        update_schema=payment_schemas.UpdatePaymentLineItemCommand,
        to_list_dto=payment_map.line_to_list_dto,
        to_details_dto=payment_map.line_to_details_dto,
        from_create=payment_map.line_from_create,
        apply_update=payment_map.line_apply_update,
        validate_create=sales_rules.validate_create_payment_line_item,
        validate_update=sales_rules.validate_update_payment_line_item,
        queries=(
            QueryRoute("by-payment/{payment_id}", "get_by_payment", params=(("payment_id", UUID),)),
            QueryRoute("by-invoice/{invoice_id}", "get_by_invoice", params=(("invoice_id", UUID),)),
            QueryRoute(
                "total-paid-for-invoice/{invoice_id}",
                "get_total_paid_for_invoice",
                kind="scalar",
                params=(("invoice_id", UUID),),
            ),
        ),
    ),
    Feature(
        name="quotes",
        entity_name="Quote",
        model=models.Quote,
        repository=QuoteRepository,
        dto=quote_schemas.QuoteDto,
        list_dto=quote_schemas.QuoteListDto,
        details_dto=quote_schemas.QuoteDetailsDto,
        create_schema=quote_schemas.CreateQuoteCommand,
        update_schema=quote_schemas.UpdateQuoteCommand,
        to_list_dto=quote_map.to_list_dto,
        to_details_dto=quote_map.to_details_dto,
        from_create=quote_map.from_create,
        apply_update=quote_map.apply_update,
        validate_create=sales_rules.validate_create_quote,
        validate_update=sales_rules.validate_update_quote,
        queries=(
            QueryRoute("by-number/{number}", "get_by_number", kind="one", params=(("number", str),)),
            QueryRoute("by-status/{quote_status_id}", "get_by_quote_status", params=(("quote_status_id", UUID),)),
        ),
    ),
    Feature(
        name="quote-line-items",
        entity_name="QuoteLineItem",
        model=models.QuoteLineItem,
        repository=QuoteLineItemRepository,
        dto=quote_schemas.QuoteLineItemDto,
        list_dto=quote_schemas.QuoteLineItemListDto,
        details_dto=quote_schemas.QuoteLineItemDetailsDto,
        create_schema=quote_schemas.CreateQuoteLineItemCommand,
        update_schema=quote_schemas.UpdateQuoteLineItemCommand,
        to_list_dto=quote_map.line_to_list_dto,
        to_details_dto=quote_map.line_to_details_dto,
        from_create=quote_map.line_from_create,
        apply_update=quote_map.line_apply_update,
        validate_create=sales_rules.validate_create_quote_line_item,
        validate_update=sales_rules.validate_update_quote_line_item,
        queries=(
            QueryRoute("by-quote/{quote_id}", "get_by_quote", params=(("quote_id", UUID),)),
            QueryRoute("total-for-quote/{quote_id}", "get_total_for_quote", kind="scalar", params=(("quote_id", UUID),)),
        ),
    ),
    Feature(
        name="sales-orders",
        entity_name="SalesOrder",
        model=models.SalesOrder,
        repository=SalesOrderRepository,
        dto=sales_order_schemas.SalesOrderDto,
        list_dto=sales_order_schemas.SalesOrderListDto,
        details_dto=sales_order_schemas.SalesOrderDetailsDto,
        create_schema=sales_order_schemas.CreateSalesOrderCommand,
        update_schema=sales_order_schemas.UpdateSalesOrderCommand,
        to_list_dto=sales_order_map.to_list_dto,
        to_details_dto=sales_order_map.to_details_dto,
        from_create=sales_order_map.from_create,
        apply_update=sales_order_map.apply_update,
        validate_create=sales_rules.validate_create_sales_order,
        validate_update=sales_rules.validate_update_sales_order,
        queries=(
            QueryRoute("by-number/{number}", "get_by_number", kind="one", params=(("number", str),)),
            QueryRoute(
                "by-status/{sales_order_status_id}",
                "get_by_sales_order_status",
                params=(("sales_order_status_id", UUID),),
            ),
            QueryRoute("by-quote/{quote_id}", "get_by_quote", params=(("quote_id", UUID),)),
            QueryRoute("by-order-date-range", "get_by_order_date_range", params=DATE_RANGE),
        ),
    ),
    Feature(
        name="products",
        entity_name="Product",
        model=models.Product,
        repository=ProductRepository,
        dto=product_schemas.ProductDto,
        list_dto=product_schemas.ProductListDto,
        details_dto=product_schemas.ProductDetailsDto,
        create_schema=product_schemas.CreateProductCommand,
        update_schema=product_schemas.UpdateProductCommand,
        to_list_dto=product_map.to_list_dto,
        to_details_dto=product_map.to_details_dto,
        from_create=product_map.from_create,
        apply_update=product_map.apply_update,
        validate_create=sales_rules.validate_create_product,
        validate_update=sales_rules.validate_update_product,
        queries=(
            QueryRoute("by-name/{name}", "get_by_name", kind="one", params=(("name", str),)),
            QueryRoute("by-type/{product_type_id}", "get_by_product_type", params=(("product_type_id", UUID),)),
        ),
    ),
    Feature(
        name="roles",
        entity_name="Role",
        model=models.Role,
        repository=RoleRepository,
        dto=role_schemas.RoleDto,
        list_dto=role_schemas.RoleListDto,
        details_dto=role_schemas.RoleDetailsDto,
        create_schema=role_schemas.CreateRoleCommand,
        update_schema=role_schemas.UpdateRoleCommand,
        to_list_dto=role_map.to_list_dto,
        to_details_dto=role_map.to_details_dto,
        from_create=role_map.from_create,
        apply_update=role_map.apply_update,
        validate_create=security_rules.validate_create_role,
        validate_update=security_rules.validate_update_role,
        queries=(
            QueryRoute("by-name/{name}", "get_by_name", kind="one", params=(("name", str),)),
            QueryRoute("by-user/{user_id}", "get_by_user", params=(("user_id", UUID),)),
        ),
    ),
    Feature(
        name="teams",
        entity_name="Team",
        model=models.Team,
        repository=TeamRepository,
        dto=team_schemas.TeamDto,
        list_dto=team_schemas.TeamListDto,
        details_dto=team_schemas.TeamDetailsDto,
        create_schema=team_schemas.CreateTeamCommand,
        update_schema=team_schemas.UpdateTeamCommand,
        to_list_dto=team_map.to_list_dto,
        to_details_dto=team_map.to_details_dto,
        from_create=team_map.from_create,
        apply_update=team_map.apply_update,
        validate_create=security_rules.validate_create_team,
        validate_update=security_rules.validate_update_team,
        queries=(
            QueryRoute("by-name/{name}", "get_by_name", kind="one", params=(("name", str),)),
            QueryRoute("by-user/{user_id}", "get_by_user", params=(("user_id", UUID),)),
        ),
    ),
    Feature(
        name="users",
        entity_name="User",
        model=models.User,
        repository=UserRepository,
        dto=user_schemas.UserDto,
        list_dto=user_schemas.UserListDto,
        details_dto=user_schemas.UserDetailsDto,
        create_schema=user_schemas.CreateUserCommand,
        update_schema=user_schemas.UpdateUserCommand,
        to_list_dto=user_map.to_list_dto,
        to_details_dto=user_map.to_details_dto,
        from_create=user_map.from_create,
        apply_update=user_map.apply_update,
        validate_create=security_rules.validate_create_user,
        validate_update=security_rules.validate_update_user,
        queries=(
            QueryRoute("by-login-name/{login_name}", "get_by_login_name", kind="one", params=(("login_name", str),)),
            QueryRoute("by-team/{team_id}", "get_by_team", params=(("team_id", UUID),)),
            QueryRoute("by-role/{role_id}", "get_by_role", params=(("role_id", UUID),)),
        ),
    ),
]


JUNCTION_FEATURES = [
    JunctionFeature(
        name="team-users",
        repository=TeamUserRepository,
        first_name="Team",
        second_name="User",
        first_segment="teams",
        second_segment="users",
    ),
    JunctionFeature(
        name="user-roles",
        repository=UserRoleRepository,
        first_name="User",
        second_name="Role",
        first_segment="users",
        second_segment="roles",
    ),
]


FEATURES: dict[str, Feature | JunctionFeature] = {
    f.name: f for f in [*BUSINESS_FEATURES, *LOOKUP_FEATURES, *JUNCTION_FEATURES]
}
