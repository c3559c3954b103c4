"""Security: JWT and password hashing."""

from marketplace.infrastructure.security.jwt import (
    JWTTokenService,
    TokenExpiredError,
    create_access_token,
    verify_token,
)
from marketplace.infrastructure.security.password import (
    get_dummy_hash,
    get_password_hash,
    verify_password,
)

__all__ = [
    "JWTTokenService",
    "TokenExpiredError",
    "create_access_token",
    "get_dummy_hash",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
