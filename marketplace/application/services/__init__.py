"""Application services: identity resolution, authorization, role registry, accounts."""

from marketplace.application.services.access_policy import (
    OwnershipRule,
    ResourceAccessPolicy,
    ResourcePolicy,
    VisibilityFilter,
    build_default_policies,
)
from marketplace.application.services.auth_service import AuthService
from marketplace.application.services.authorization_service import AuthorizationGate
from marketplace.application.services.identity_resolver import IdentityResolver
from marketplace.application.services.permission_service import (
    PermissionService,
    has_permission,
)
from marketplace.application.services.rbac_seed import DEFAULT_ROLES, seed_default_roles
from marketplace.application.services.role_service import RoleService
from marketplace.application.services.user_service import UserAdministrationService

__all__ = [
    "DEFAULT_ROLES",
    "AuthService",
    "AuthorizationGate",
    "IdentityResolver",
    "OwnershipRule",
    "PermissionService",
    "ResourceAccessPolicy",
    "ResourcePolicy",
    "RoleService",
    "UserAdministrationService",
    "VisibilityFilter",
    "build_default_policies",
    "has_permission",
    "seed_default_roles",
]
