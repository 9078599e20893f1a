# crm/api/v1/error_handlers.py
"""
Translation of exceptions into the JSON response envelope.

Every failure leaves the API as `{"success": false, "message", "data": null, "errors"}`.
The mapping lives in one place, `error_response()`:

    ValidationException            -> 400, errors = every violation
    NotFoundException              -> 404
    BadRequestException            -> 400
    UnauthorizedAccessException    -> 401
    RepositoryError (and subclass) -> exc.http_status(), errors = exc.fields
    anything else                  -> 500 (details only when ENV == "development")

`ExceptionHandlingMiddleware` applies it to whatever escapes a route. Errors
raised by FastAPI itself (malformed bodies, unknown routes) never reach the
middleware as exceptions, so they get small exception handlers producing the
same envelope.

Register both from the app factory:

    app.add_middleware(ExceptionHandlingMiddleware)
    register_exception_handlers(app)
"""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from crm.config.settings import get_settings
from crm.exceptions.base import (
    BadRequestException,
    NotFoundException,
    RepositoryError,
    UnauthorizedAccessException,
    ValidationException,
)
from crm.schemas.envelope import ApiResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."
GENERIC_ERROR_DETAIL = "An unexpected error occurred. Please try again later."


def envelope(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ApiResponse.fail(message, errors).to_body())


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Map one exception to its status code and envelope."""
    context = {"method": request.method, "path": request.url.path, "error_type": type(exc).__name__}

    if isinstance(exc, ValidationException):
        logger.info("api.validation_failed", extra={**context, "errors": exc.errors})
        return envelope(400, exc.message, exc.errors)

    if isinstance(exc, NotFoundException):
        logger.info("api.not_found", extra=context)
        return envelope(404, exc.message)

    if isinstance(exc, BadRequestException):
        logger.info("api.bad_request", extra=context)
        return envelope(400, exc.message)

    if isinstance(exc, UnauthorizedAccessException):
        logger.info("api.unauthorized", extra=context)
        return envelope(401, exc.message)

    if isinstance(exc, RepositoryError):
        # the constraint name is logged, never returned
        logger.warning(
            "api.repository_error",
            extra={**context, "fields": exc.fields, "constraint": exc.constraint, "code": exc.error_code},
        )
        return envelope(exc.http_status(), exc.message, exc.fields)

    logger.error("api.unhandled_exception", extra=context, exc_info=exc)
    if get_settings().is_development:
        detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return envelope(500, str(exc), [detail])
    return envelope(500, GENERIC_ERROR_MESSAGE, [GENERIC_ERROR_DETAIL])


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Catches anything a route raises and answers with the error envelope."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return error_response(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """400 for bodies and parameters that fail pydantic validation, one string per error."""
    errors = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    logger.info(
        "api.request_validation_failed",
        extra={"method": request.method, "path": request.url.path, "errors": errors},
    )
    return envelope(400, "Validation failed", errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and other framework HTTP errors."""
    logger.info(
        "api.http_error",
        extra={"method": request.method, "path": request.url.path, "status_code": exc.status_code},
    )
    response = envelope(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_exception_handlers(app) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
