"""Identity resolver: bearer credential -> identity with role and permissions loaded."""

from __future__ import annotations

import asyncio
import logging

from marketplace.application.dtos.user import IdentityResult
from marketplace.application.interfaces.repositories import IUserRepository
from marketplace.application.interfaces.services import ITokenService, TokenExpiredError
from marketplace.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    RoleNotFoundException,
    ServiceUnavailableException,
)

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Turn a signed credential into a fully loaded identity, or fail closed.

    The storage lookup is the only await; it is bounded by ``lookup_timeout``
    (seconds, None for no bound) and a timeout surfaces as Unavailable.
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        token_service: ITokenService,
        *,
        lookup_timeout: float | None = None,
    ) -> None:
        self._users = user_repo
        self._tokens = token_service
        self._lookup_timeout = lookup_timeout

    async def resolve(self, credential: str | None) -> IdentityResult:
        """Return the identity the credential names.

        Raises:
            AuthenticationException: credential missing, expired or invalid.
            ResourceNotFoundException: the identity no longer exists.
            RoleNotFoundException: the identity's role cannot be resolved.
            ServiceUnavailableException: the lookup timed out.
        """
        if credential is None or not credential.strip():
            raise AuthenticationException.missing()
        try:
            payload = self._tokens.verify_token(credential.strip())
        except TokenExpiredError:
            raise AuthenticationException.expired() from None
        except ValueError:
            raise AuthenticationException.invalid() from None
        identity_id = str(payload["sub"])

        identity = await self._lookup(identity_id)
        if identity is None:
            logger.warning("Valid token for missing identity %s", identity_id)
            raise ResourceNotFoundException("identity", identity_id, "User not found")
        if identity.role is None:
            logger.warning(
                "Identity %s references missing role %s", identity.id, identity.role_id
            )
            raise RoleNotFoundException(identity.role_id)
        return identity

    async def _lookup(self, identity_id: str) -> IdentityResult | None:
        try:
            return await asyncio.wait_for(
                self._users.get_identity(identity_id), timeout=self._lookup_timeout
            )
        except TimeoutError:
            logger.warning(
                "Identity lookup for %s exceeded %ss", identity_id, self._lookup_timeout
            )
            raise ServiceUnavailableException(
                "Identity lookup timed out, please retry"
            ) from None
