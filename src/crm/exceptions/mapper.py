import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import DuplicateError, RepositoryError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_sqlserver(msg: str) -> list[str] | None:
    """
    SQL Server messages:
      - "Cannot insert the value NULL into column 'login_name', table 'VibeCRM.dbo.users'"
      - "... conflicted with the FOREIGN KEY constraint "fk_...". ... column 'activity_type_id'."
    Unique violations name only the constraint, never the column.
    """
    m = re.search(r"into column '(?P<col>[^']+)'", msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r"conflicted with the .+ column '(?P<col>[^']+)'", msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    return None


def _extract_columns_postgres(msg: str) -> list[str] | None:
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    # DETAIL:  Key (col1, col2)=(...) already exists.
    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: users.login_name' / 'NOT NULL constraint failed: users.login_name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]

    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Best-effort column names from the driver message (SQL Server, Postgres, SQLite)."""
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    for extractor in (_extract_columns_sqlserver, _extract_columns_postgres, _extract_columns_sqlite):
        cols = extractor(msg)
        if cols:
            return cols

    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Map a SQLAlchemy IntegrityError to DuplicateError / RepositoryError and raise it.

    The raw driver text is only ever logged at DEBUG; raised messages are client-safe.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)

    model_part = model_name or "Record"
    context = {"model": model_part, "fields": columns, "constraint": constraint_name}

    if exc_cls is UniqueConstraintError:
        # Expected client-level conflict (409), so INFO rather than ERROR
        logger.info("mapper.duplicate_detected", extra=context)
        if columns:
            raise DuplicateError(
                f"{model_part} already exists for field(s): {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise DuplicateError(f"{model_part} already exists", constraint=constraint_name) from exc

    if exc_cls is NotNullConstraintError:
        logger.info("mapper.not_null_violation", extra=context)
        if columns:
            raise RepositoryError(
                f"Missing required field(s): {', '.join(columns)} for {model_part}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise RepositoryError(f"Missing required field for {model_part}", constraint=constraint_name) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info("mapper.foreign_key_violation", extra=context)
        if columns:
            raise RepositoryError(
                f"{model_part} referenced entity not found for field(s): {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise RepositoryError(f"{model_part} foreign key constraint violated", constraint=constraint_name) from exc

    raw = str(exc.orig) if exc.orig is not None else str(exc)

    if exc_cls is CheckConstraintError:
        logger.debug("mapper.check_constraint_failure", extra={**context, "raw": raw})
        raise RepositoryError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        ) from exc

    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": raw})
    raise RepositoryError(f"{model_part} database integrity error.") from exc


# -----------------------
# Async context manager used by every repository write
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            await self.db.flush()

    Rolls back on error. IntegrityError is mapped to an app-level exception;
    RepositoryError passes through; anything else becomes a RepositoryError.
    """
    try:
        yield
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except RepositoryError:
        await _safe_rollback(db, model_name)
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("db.unexpected_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("db.rollback_failed", extra={"model": model_name})
