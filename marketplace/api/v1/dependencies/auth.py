"""Credential and identity dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.application.dtos.user import IdentityResult
from marketplace.application.interfaces.services import ITokenService
from marketplace.application.services.identity_resolver import IdentityResolver
from marketplace.core.config import get_settings
from marketplace.infrastructure.persistence.repositories import UserRepository
from marketplace.infrastructure.security.jwt import JWTTokenService

from .db import get_user_repo

_http_bearer = HTTPBearer(auto_error=False)


def get_token_service() -> ITokenService:
    """Token issue/verify (composition root)."""
    return JWTTokenService()


def get_identity_resolver(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    token_service: Annotated[ITokenService, Depends(get_token_service)],
) -> IdentityResolver:
    """Identity resolver bounded by identity_lookup_timeout_seconds."""
    return IdentityResolver(
        user_repo,
        token_service,
        lookup_timeout=get_settings().identity_lookup_timeout_seconds,
    )


async def get_current_identity_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> IdentityResult | None:
    """Return the identity if a bearer credential was sent, else None.

    A credential that is sent but expired, invalid or orphaned fails the
    request; it is never downgraded to anonymous.
    """
    if credentials is None:
        return None
    return await resolver.resolve(credentials.credentials)


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> IdentityResult:
    """Return the resolved identity; 401 when no credential was sent."""
    return await resolver.resolve(credentials.credentials if credentials else None)
