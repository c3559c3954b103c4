"""Authorization dependencies: the gate, the policy table, and require_access()."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from marketplace.application.dtos.user import IdentityResult
from marketplace.application.services.access_policy import ResourceAccessPolicy
from marketplace.application.services.authorization_service import AuthorizationGate
from marketplace.core.config import get_settings
from marketplace.domain.enums import AccessOperation

from .auth import get_current_identity_optional


@lru_cache
def get_authorization_gate() -> AuthorizationGate:
    """Stateless gate shared by all requests."""
    return AuthorizationGate()


@lru_cache
def get_access_policy() -> ResourceAccessPolicy:
    """Default policy table bound to the configured admin slug."""
    return ResourceAccessPolicy(
        get_authorization_gate(), admin_slug=get_settings().admin_role_slug
    )


def require_access(resource_type: str, operation: AccessOperation | str):
    """Dependency factory: evaluate the policy for (resource_type, operation).

    Returns the identity (None on public reads without a credential). Use for
    operations whose rule does not depend on a loaded resource; ownership
    checks call ResourceAccessPolicy.authorize with the instance instead.
    """
    op = AccessOperation(operation)

    async def _require(
        identity: Annotated[IdentityResult | None, Depends(get_current_identity_optional)],
        policy: Annotated[ResourceAccessPolicy, Depends(get_access_policy)],
    ) -> IdentityResult | None:
        policy.authorize(identity, resource_type, op)
        return identity

    return _require
