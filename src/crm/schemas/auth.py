from datetime import datetime

from .common import CamelModel


class LoginRequest(CamelModel):
    username: str
    password: str


class RefreshTokenRequest(CamelModel):
    token: str
    refresh_token: str


class AuthResponse(CamelModel):
    token: str
    refresh_token: str
    expires_at: datetime
    username: str
