"""JWT issuance and validation service (HS256, shared secret)."""

import base64
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from crm.config.settings import Settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JwtService:
    """Issues access tokens and refresh tokens and validates access tokens."""

    def __init__(self, settings: Settings):
        self.secret = settings.JWT_SECRET
        self.issuer = settings.JWT_ISSUER
        self.audience = settings.JWT_AUDIENCE
        self.expiry = timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
        self.refresh_expiry = timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRY_DAYS)

    def get_token_expiration_time(self) -> datetime:
        return datetime.now(timezone.utc) + self.expiry

    def get_refresh_token_expiration_time(self) -> datetime:
        return datetime.now(timezone.utc) + self.refresh_expiry

    def generate_token(self, claims: dict[str, Any]) -> str:
        """
        Sign `claims` together with issuer, audience, issued-at, expiry and a unique `jti`.

        Caller claims cannot override the registered ones set here.
        """
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + self.expiry,
            "jti": str(uuid.uuid4()),
        }
        token = jwt.encode(payload, self.secret, algorithm=ALGORITHM)
        logger.debug("auth.token_issued", extra={"sub": claims.get("sub")})
        return token

    def generate_refresh_token(self) -> str:
        """64 random bytes, base64 encoded. Opaque; not a JWT."""
        return base64.b64encode(secrets.token_bytes(64)).decode("ascii")

    def validate_token(self, token: str, validate_lifetime: bool = True) -> dict[str, Any] | None:
        """
        Verify signature, issuer and audience (and expiry unless disabled).

        Returns:
            The claims dict, or None when the token is not acceptable.
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_exp": validate_lifetime},
            )
        except ExpiredSignatureError:
            logger.info("auth.token_expired")
            return None
        except InvalidTokenError as e:
            logger.info("auth.token_invalid", extra={"reason": type(e).__name__})
            return None
