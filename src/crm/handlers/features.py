"""
Feature declarations.

A `Feature` bundles everything the generic pipeline needs for one entity:
model, repository factory, schemas, mapping functions, validators and the
extra query routes it exposes. A `JunctionFeature` does the same for a
two-key link table.
"""
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

Validator = Callable[[Any], list[str]]


@dataclass(frozen=True)
class QueryRoute:
    """
    An extension GET route backed by one repository method.

    - kind: "list" (ListByQuery), "one" (FindOneQuery) or "scalar" (ScalarQuery)
    - params: (name, type) pairs passed positionally to the method; a name that
      appears as `{name}` in `path` is a path parameter, otherwise a query one
    """
    path: str
    method: str
    kind: str = "list"
    params: tuple[tuple[str, Any], ...] = ()


@dataclass(frozen=True)
class Feature:
    name: str
    entity_name: str
    model: type
    repository: Callable[[AsyncSession], Any]

    dto: type
    list_dto: type
    details_dto: type
    create_schema: type
    update_schema: type

    to_list_dto: Callable[[Any], Any]
    to_details_dto: Callable[[Any], Any]
    from_create: Callable[[Any], Any]
    apply_update: Callable[[Any, Any], Any]

    validate_create: Validator
    validate_update: Validator

    queries: tuple[QueryRoute, ...] = ()
    is_lookup: bool = False

    @property
    def id_field(self) -> str:
        """Name of the id attribute on commands: `id` for lookups, else `<entity>_id`."""
        return "id" if self.is_lookup else sa_inspect(self.model).primary_key[0].key


@dataclass(frozen=True)
class JunctionFeature:
    """
    Link table between two features, addressed as
    `/{first_segment}/{first_id}/{second_segment}/{second_id}`.
    """
    name: str
    repository: Callable[[AsyncSession], Any]
    first_name: str
    second_name: str
    first_segment: str
    second_segment: str
