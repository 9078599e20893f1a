"""
Repository layer.

Usage:
    from crm.repositories import ActivityRepository, LookupRepository
    repo = LookupRepository(InvoiceStatus, db)
"""

from .base_repository import BaseRepository
from .lookup_repository import LookupRepository
from .junction_repository import JunctionRepository, TeamUserRepository, UserRoleRepository
from .activity_repository import ActivityRepository
from .company_repository import CompanyRepository
from .invoice_repository import InvoiceRepository
from .payment_repository import PaymentRepository, PaymentLineItemRepository
from .quote_repository import QuoteRepository, QuoteLineItemRepository
from .sales_order_repository import SalesOrderRepository
from .product_repository import ProductRepository
from .role_repository import RoleRepository
from .team_repository import TeamRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "LookupRepository",
    "JunctionRepository",
    "TeamUserRepository",
    "UserRoleRepository",
    "ActivityRepository",
    "CompanyRepository",
    "InvoiceRepository",
    "PaymentRepository",
    "PaymentLineItemRepository",
    "QuoteRepository",
    "QuoteLineItemRepository",
    "SalesOrderRepository",
    "ProductRepository",
    "RoleRepository",
    "TeamRepository",
    "UserRepository",
]
