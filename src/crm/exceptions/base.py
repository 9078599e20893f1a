"""
Exception taxonomy for the CRM pipeline.

Two families live here:

- Application exceptions (`ApplicationException` and subclasses) are raised by
  validators, handlers and routes. Each maps to one HTTP status in the
  exception middleware.
- Repository exceptions (`RepositoryError` and subclasses) are raised by the
  persistence layer. They carry an error code that decides their HTTP status.
"""

from typing import Iterable


# =================================================================================================================
# Application exceptions
# =================================================================================================================

class ApplicationException(Exception):
    """Base for errors raised above the repository layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationException(ApplicationException):
    """One or more validator rules failed; `errors` holds every violation, in order."""

    def __init__(self, errors: Iterable[str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = list(errors)


class NotFoundException(ApplicationException):
    def __init__(self, name: str, key: object = None, message: str | None = None):
        super().__init__(message or f"{name} with ID {key} not found")
        self.name = name
        self.key = key


class BadRequestException(ApplicationException):
    pass


class UnauthorizedAccessException(ApplicationException):
    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message)


# =================================================================================================================
# Repository exceptions
# =================================================================================================================

class RepositoryError(Exception):
    """
    Base exception for persistence errors.

    - message: client-safe message
    - fields: optional column names involved (e.g. ['login_name'])
    - constraint: optional DB constraint name, for logs only
    - error_code: short canonical code ('duplicate', 'invalid_field', ...)
    """

    # error_code -> HTTP status; anything else is a 400
    ERROR_CODE_TO_STATUS = {
        "duplicate": 409,
        "invalid_field": 422,
        "not_found": 404,
        "invalid_input": 422,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    def to_payload(self) -> dict:
        """
        JSON-friendly summary: `{"detail", "code"?, "fields"?}`.

        The constraint name stays out of the payload; it is for logs.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class InvalidFieldError(RepositoryError):
    """Raised when a caller names a field the model does not map."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


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
]
