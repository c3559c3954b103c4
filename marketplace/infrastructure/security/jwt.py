"""JWT token creation and verification for authentication.

Uses marketplace.core.config for secret and algorithm. Tokens carry the
identity id in ``sub`` plus ``iat`` and ``exp``.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from marketplace.application.interfaces.services import TokenExpiredError
from marketplace.core.config import get_settings

__all__ = ["JWTTokenService", "TokenExpiredError", "create_access_token", "verify_token"]


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (must include sub).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    now = datetime.now(UTC)
    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.setdefault("iat", now)
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp, iat and sub.

    Args:
        token: JWT string (e.g. from Authorization header).

    Returns:
        Decoded payload dict.

    Raises:
        TokenExpiredError: If the signature is valid but the token expired.
        ValueError: If token is malformed, badly signed, or missing claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_iat": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


class JWTTokenService:
    """ITokenService backed by python-jose and application settings."""

    def create_access_token(self, identity_id: str) -> str:
        return create_access_token({"sub": identity_id})

    def verify_token(self, token: str) -> dict[str, Any]:
        return verify_token(token)
