"""Authorization gate: evaluates a requirement tree against a resolved identity.

The gate is pure and synchronous. Every input it needs (the identity, its role
with permissions, the owner id of a loaded resource) has been fetched before it
runs, so a decision never blocks on storage and never mutates state.
"""

from __future__ import annotations

import logging

from marketplace.application.dtos.role import RoleResult
from marketplace.application.dtos.user import IdentityResult
from marketplace.application.services.permission_service import has_permission
from marketplace.domain.enums import UserStatus
from marketplace.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    RoleNotFoundException,
)
from marketplace.domain.requirements import (
    AllOf,
    AnyOf,
    AuthenticatedRequirement,
    OwnerOrAdminRequirement,
    OwnerRequirement,
    PermissionRequirement,
    Requirement,
    RoleSlugRequirement,
)

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Single decision point for every gated operation.

    authorize() raises; is_allowed() answers with a bool. Both fail closed:
    a missing identity is Unauthenticated, a missing role is NotFound(role),
    a suspended account is Forbidden.
    """

    def authorize(
        self, identity: IdentityResult | None, requirement: Requirement
    ) -> None:
        """Raise unless ``identity`` satisfies ``requirement``.

        Raises:
            AuthenticationException: identity is None (never treated as anonymous).
            RoleNotFoundException: the identity's role could not be resolved.
            AuthorizationException: the requirement is not met.
        """
        if identity is None:
            raise AuthenticationException.missing()
        role = identity.role
        if role is None:
            logger.warning(
                "Identity %s references unresolvable role %s",
                identity.id,
                identity.role_id,
            )
            raise RoleNotFoundException(identity.role_id)
        if identity.status == UserStatus.SUSPENDED.value:
            logger.debug("Denied suspended identity %s", identity.id)
            raise AuthorizationException(message="Access denied: account suspended")
        unmet = self._first_unmet(identity, role, requirement)
        if unmet is not None:
            logger.debug(
                "Denied identity %s (role %s): %s requirement not met",
                identity.id,
                role.slug,
                unmet,
            )
            raise AuthorizationException(requirement=unmet)

    def is_allowed(
        self, identity: IdentityResult | None, requirement: Requirement
    ) -> bool:
        """Non-raising form of authorize(); NotFound(role) still propagates."""
        try:
            self.authorize(identity, requirement)
        except (AuthenticationException, AuthorizationException):
            return False
        return True

    def _first_unmet(
        self,
        identity: IdentityResult,
        role: RoleResult,
        requirement: Requirement,
    ) -> str | None:
        """Return the kind of the requirement that failed, or None if it passes."""
        if isinstance(requirement, AuthenticatedRequirement):
            return None
        if isinstance(requirement, RoleSlugRequirement):
            return None if role.slug == requirement.slug else requirement.kind
        if isinstance(requirement, PermissionRequirement):
            if has_permission(role, requirement.action, requirement.resource):
                return None
            return requirement.kind
        if isinstance(requirement, OwnerRequirement):
            return None if _owns(identity, requirement.owner_id) else requirement.kind
        if isinstance(requirement, OwnerOrAdminRequirement):
            if _owns(identity, requirement.owner_id) or role.slug == requirement.admin_slug:
                return None
            return requirement.kind
        if isinstance(requirement, AnyOf):
            first_unmet: str | None = None
            for member in requirement.requirements:
                unmet = self._first_unmet(identity, role, member)
                if unmet is None:
                    return None
                first_unmet = first_unmet or unmet
            # Report the primary member; an admin-override alternative is secondary.
            return first_unmet
        if isinstance(requirement, AllOf):
            for member in requirement.requirements:
                unmet = self._first_unmet(identity, role, member)
                if unmet is not None:
                    return unmet
            return None
        logger.error("Unknown requirement type %s; denying", type(requirement).__name__)
        return "Unknown"


def _owns(identity: IdentityResult, owner_id: str | None) -> bool:
    # Ownerless resources never match.
    return owner_id is not None and owner_id == identity.id
