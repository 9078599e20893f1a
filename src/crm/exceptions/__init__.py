from .base import (
    ApplicationException,
    ValidationException,
    NotFoundException,
    BadRequestException,
    UnauthorizedAccessException,
    RepositoryError,
    NotFoundError,
    DuplicateError,
    InvalidFieldError,
)
from .integrity_classifier import (
    ConstraintViolationError,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
    UnknownIntegrityError,
    classify_integrity_error,
)
from .mapper import db_error_handler, raise_mapped_integrity_error

__all__ = [
    "ApplicationException",
    "ValidationException",
    "NotFoundException",
    "BadRequestException",
    "UnauthorizedAccessException",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "ConstraintViolationError",
    "UniqueConstraintError",
    "NotNullConstraintError",
    "ForeignKeyConstraintError",
    "CheckConstraintError",
    "UnknownIntegrityError",
    "classify_integrity_error",
    "db_error_handler",
    "raise_mapped_integrity_error",
]
