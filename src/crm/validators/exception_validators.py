"""
Model introspection used by repositories before touching the database.

These checks turn predictable integrity failures (unknown field, missing
NOT NULL column, duplicate unique value) into precise repository errors
instead of relying on the driver's message.
"""
from typing import Iterable

from sqlalchemy import UniqueConstraint, and_, inspect as sa_inspect
from sqlalchemy.sql import select


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the keys of `kwargs` that are not mapped attributes of `model`.
    - model: the SQLAlchemy model class (not instance)
    """
    mapper = sa_inspect(model)
    # columns and relationships; attr.key is the name callers use
    allowed = {attr.key for attr in mapper.attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def get_required_columns(model) -> list[str]:
    """
    Columns that are NOT NULL, have no client/server default and are not auto PKs.
    """
    cols = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.autoincrement is True and col.primary_key
        if not col.nullable and not has_default and not is_auto_pk:
            cols.append(col.key)
    return cols


def get_unique_column_sets(model) -> list[Iterable[str]]:
    """
    Unique column sets declared on the table, from `unique=True` columns,
    `UniqueConstraint` objects and unique indexes.
    """
    table = model.__table__
    unique_sets = [[col.key] for col in table.columns if col.unique]

    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            unique_sets.append([c.key for c in constraint.columns])

    for idx in table.indexes:
        if idx.unique:
            unique_sets.append([c.key for c in idx.columns])

    return unique_sets


async def find_unique_conflicts(db, model, values: dict) -> set[str]:
    """
    Query for existing rows that would violate a unique constraint.

    Only sets whose columns are all present in `values` are checked. Returns
    the conflicting column names (best-effort; the flush still has the final word).
    """
    conflicts = set()

    for cols in get_unique_column_sets(model):
        if not all(c in values for c in cols):
            continue

        conditions = [getattr(model, c) == values[c] for c in cols]
        res = await db.execute(select(model).where(and_(*conditions)).limit(1))
        if res.scalars().first() is not None:
            conflicts.update(cols)

    return conflicts
