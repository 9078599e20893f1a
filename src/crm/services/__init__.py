from .jwt_service import JwtService
from .passwords import hash_password, verify_password

__all__ = ["JwtService", "hash_password", "verify_password"]
