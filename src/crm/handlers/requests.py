"""
Request types dispatched through the mediator.

Every request names the feature it targets (e.g. "activities"); the mediator
looks the feature up in the catalog, runs its validators and hands the request
to the generic handler registered for the request type.
"""
from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class Request:
    feature: str


# --- Queries ---

@dataclass(frozen=True)
class GetAllQuery(Request):
    pass


@dataclass(frozen=True)
class GetPagedQuery(Request):
    page_number: int
    page_size: int


@dataclass(frozen=True)
class GetByIdQuery(Request):
    id: UUID


@dataclass(frozen=True)
class ListByQuery(Request):
    """Call a list-returning repository method, e.g. `get_by_assigned_user`."""
    method: str
    args: tuple = ()


@dataclass(frozen=True)
class FindOneQuery(Request):
    """Call a repository method returning one entity or None, e.g. `get_default`."""
    method: str
    args: tuple = ()


@dataclass(frozen=True)
class ScalarQuery(Request):
    """Call a repository method returning a plain value, e.g. `get_total_for_quote`."""
    method: str
    args: tuple = ()


@dataclass(frozen=True)
class ListLinksQuery(Request):
    """Ids linked to `first_id` (second side) or to `second_id` (first side)."""
    first_id: UUID | None = None
    second_id: UUID | None = None


# --- Commands ---

@dataclass(frozen=True)
class CreateCommand(Request):
    payload: Any


@dataclass(frozen=True)
class UpdateCommand(Request):
    id: UUID
    payload: Any


@dataclass(frozen=True)
class DeleteCommand(Request):
    id: UUID
    modified_by: UUID | None = None


@dataclass(frozen=True)
class LinkCommand(Request):
    first_id: UUID
    second_id: UUID


@dataclass(frozen=True)
class UnlinkCommand(Request):
    first_id: UUID
    second_id: UUID
