"""
Classify a SQLAlchemy `IntegrityError` into a constraint kind.

The classes below are internal labels. Repositories never raise them; the
mapper turns each label into a `DuplicateError` or `RepositoryError`.

Classification order:
1. SQL Server native error number (pyodbc/aioodbc put it in the message as
   `(2627)` and in `args`).
2. Postgres `pgcode`.
3. Keyword matching on the driver message (SQLite and anything else).
"""
import logging
import re
from enum import Enum, IntEnum
from typing import Type
from sqlalchemy.exc import IntegrityError
from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


# https://learn.microsoft.com/sql/relational-databases/errors-events/database-engine-events-and-errors
class SqlServerErrorNumbers(IntEnum):
    UNIQUE_CONSTRAINT = 2627
    UNIQUE_INDEX = 2601
    NOT_NULL = 515
    CONSTRAINT_CONFLICT = 547  # FOREIGN KEY or CHECK, told apart by message


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION: CheckConstraintError,
}

_SQLSERVER_NUMBER_RE = re.compile(r"\((?P<num>\d{3,5})\)")
_SQLSERVER_CONSTRAINT_RE = re.compile(r"constraint [\"'](?P<name>[^\"']+)[\"']", re.IGNORECASE)


def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _sqlserver_error_number(orig) -> int | None:
    """Pull the native error number out of a pyodbc-style exception."""
    number = getattr(orig, "number", None)
    if isinstance(number, int):
        return number
    for arg in getattr(orig, "args", ()) or ():
        for match in _SQLSERVER_NUMBER_RE.finditer(str(arg)):
            num = int(match.group("num"))
            if num in SqlServerErrorNumbers._value2member_map_:
                return num
    return None


def _classify_from_sqlserver(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    number = _sqlserver_error_number(orig)
    if number is None:
        return None, None

    msg = str(orig)
    match = _SQLSERVER_CONSTRAINT_RE.search(msg)
    constraint_name = match.group("name") if match else None
    logger.debug("SQL Server integrity diagnostic", extra={"number": number, "constraint_name": constraint_name})

    if number in (SqlServerErrorNumbers.UNIQUE_CONSTRAINT, SqlServerErrorNumbers.UNIQUE_INDEX):
        return UniqueConstraintError, constraint_name
    if number == SqlServerErrorNumbers.NOT_NULL:
        return NotNullConstraintError, constraint_name
    # 547 covers both FOREIGN KEY and CHECK conflicts
    if "check constraint" in msg.lower():
        return CheckConstraintError, constraint_name
    return ForeignKeyConstraintError, constraint_name


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)
    if exception_class:
        logger.debug("Postgres integrity diagnostic", extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": pgcode, "constraint_name": constraint_name}
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return UniqueConstraintError, None

    if _match_any(normalized, ["not null constraint", "not null", "null value in column", "cannot insert the value null"]):
        return NotNullConstraintError, None

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ForeignKeyConstraintError, None

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError, None

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    logger.debug("Unknown integrity raw message", extra={"raw": msg})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Classify a SQLAlchemy IntegrityError.

    Returns:
        (ConstraintViolationError subclass, constraint name if the driver reported one)
    """
    orig = exc.orig

    for classifier in (_classify_from_sqlserver, _classify_from_postgres_diag):
        exception_class, constraint_name = classifier(orig)
        if exception_class is not None:
            return exception_class, constraint_name

    return _classify_from_generic_message(str(orig))
