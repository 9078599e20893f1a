from .base import Base, AuditMixin, LookupMixin, utcnow, next_modified_date
from .connection import ConnectionFactory, get_connection_factory, get_async_session

__all__ = [
    "Base",
    "AuditMixin",
    "LookupMixin",
    "utcnow",
    "next_modified_date",
    "ConnectionFactory",
    "get_connection_factory",
    "get_async_session",
]
