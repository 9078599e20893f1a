"""FastAPI dependencies shared by the routers."""

import logging
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from crm.config.settings import get_settings
from crm.database.connection import get_async_session
from crm.exceptions.base import UnauthorizedAccessException
from crm.handlers import FEATURES, Mediator
from crm.services.jwt_service import JwtService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported through the envelope, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_jwt_service() -> JwtService:
    return JwtService(get_settings())


async def get_mediator(db: AsyncSession = Depends(get_async_session)) -> Mediator:
    return Mediator(db, FEATURES)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_service: JwtService = Depends(get_jwt_service),
) -> UUID:
    """
    Id of the authenticated user, read from the `sub` claim of the bearer token.

    Raises:
        UnauthorizedAccessException: missing, invalid or expired token.
    """
    if credentials is None:
        raise UnauthorizedAccessException()

    claims = jwt_service.validate_token(credentials.credentials)
    if claims is None:
        raise UnauthorizedAccessException()

    try:
        return UUID(str(claims.get("sub")))
    except ValueError as e:
        logger.info("auth.invalid_subject")
        raise UnauthorizedAccessException() from e
