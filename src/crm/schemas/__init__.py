from .common import AuditDto, CamelModel, Money
from .envelope import ApiResponse, PagedResult, DEFAULT_SUCCESS_MESSAGE

__all__ = [
    "AuditDto",
    "CamelModel",
    "Money",
    "ApiResponse",
    "PagedResult",
    "DEFAULT_SUCCESS_MESSAGE",
]
