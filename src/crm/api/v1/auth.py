"""Login and token refresh. These are the only `/api` routes that need no bearer token."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crm.api.dependencies import get_jwt_service
from crm.database.connection import get_async_session
from crm.exceptions.base import UnauthorizedAccessException
from crm.models.user import User
from crm.repositories.user_repository import UserRepository
from crm.schemas.auth import AuthResponse, LoginRequest, RefreshTokenRequest
from crm.schemas.envelope import ApiResponse
from crm.services.jwt_service import JwtService
from crm.services.passwords import hash_password, needs_rehash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid username or password"
INVALID_TOKEN = "Invalid token"


def _issue(jwt_service: JwtService, user: User) -> AuthResponse:
    claims = {"sub": str(user.user_id), "name": user.login_name}
    return AuthResponse(
        token=jwt_service.generate_token(claims),
        refresh_token=jwt_service.generate_refresh_token(),
        expires_at=jwt_service.get_token_expiration_time(),
        username=user.login_name,
    )


@router.post("/login")
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
    jwt_service: JwtService = Depends(get_jwt_service),
):
    users = UserRepository(db)
    user = await users.get_by_login_name(payload.username)
    if user is None or not verify_password(user.login_password, payload.password):
        logger.info("auth.login_failed", extra={"username": payload.username})
        raise UnauthorizedAccessException(INVALID_CREDENTIALS)

    if needs_rehash(user.login_password):
        user.login_password = hash_password(payload.password)
    await users.record_login(user)

    logger.info("auth.login_succeeded", extra={"user_id": str(user.user_id)})
    return ApiResponse.ok(_issue(jwt_service, user)).to_body()


@router.post("/refresh-token")
async def refresh_token(
    payload: RefreshTokenRequest,
    db: AsyncSession = Depends(get_async_session),
    jwt_service: JwtService = Depends(get_jwt_service),
):
    """Re-issue a token for a still-active user; the old token may have expired."""
    claims = jwt_service.validate_token(payload.token, validate_lifetime=False)
    if claims is None or not payload.refresh_token:
        raise UnauthorizedAccessException(INVALID_TOKEN)

    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError as e:
        raise UnauthorizedAccessException(INVALID_TOKEN) from e

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        logger.info("auth.refresh_unknown_user", extra={"user_id": str(user_id)})
        raise UnauthorizedAccessException(INVALID_TOKEN)

    logger.info("auth.token_refreshed", extra={"user_id": str(user.user_id)})
    return ApiResponse.ok(_issue(jwt_service, user)).to_body()
