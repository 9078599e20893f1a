r"""
Centralized access to all CRM database models.

Importing this package registers every table on `Base.metadata`, which is what
`create_all` in the test fixtures relies on.

Example:

from crm.models import Activity, ActivityType, TeamUser
"""

from .lookups import (
    AccountType,
    AccountStatus,
    ActivityType,
    ActivityStatus,
    InvoiceStatus,
    PaymentMethod,
    QuoteStatus,
    SalesOrderStatus,
    ProductType,
    ServiceType,
)
from .user import User
from .role import Role
from .team import Team
from .membership import TeamUser, UserRole
from .company import Company
from .activity import Activity
from .product import Product
from .quote import Quote, QuoteLineItem
from .sales_order import SalesOrder
from .invoice import Invoice
from .payment import Payment, PaymentLineItem

__all__ = [
    "AccountType",
    "AccountStatus",
    "ActivityType",
    "ActivityStatus",
    "InvoiceStatus",
    "PaymentMethod",
    "QuoteStatus",
    "SalesOrderStatus",
    "ProductType",
    "ServiceType",
    "User",
    "Role",
    "Team",
    "TeamUser",
    "UserRole",
    "Company",
    "Activity",
    "Product",
    "Quote",
    "QuoteLineItem",
    "SalesOrder",
    "Invoice",
    "Payment",
    "PaymentLineItem",
]
