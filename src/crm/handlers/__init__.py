from .catalog import FEATURES
from .mediator import Mediator
from .requests import (
    CreateCommand,
    DeleteCommand,
    FindOneQuery,
    GetAllQuery,
    GetByIdQuery,
    GetPagedQuery,
    LinkCommand,
    ListByQuery,
    ListLinksQuery,
    ScalarQuery,
    UnlinkCommand,
    UpdateCommand,
)

__all__ = [
    "FEATURES",
    "Mediator",
    "CreateCommand",
    "DeleteCommand",
    "FindOneQuery",
    "GetAllQuery",
    "GetByIdQuery",
    "GetPagedQuery",
    "LinkCommand",
    "ListByQuery",
    "ListLinksQuery",
    "ScalarQuery",
    "UnlinkCommand",
    "UpdateCommand",
]
