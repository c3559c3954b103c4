"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain value objects only; no
infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from marketplace.application.dtos.permission import PermissionPage, PermissionResult
    from marketplace.application.dtos.role import RolePage, RoleResult
    from marketplace.application.dtos.user import IdentityResult
    from marketplace.domain.value_objects.core import Grant


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for role storage (Role Registry persistence)."""

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        """Return role with permissions by ID."""

    async def get_by_slug(self, slug: str) -> RoleResult | None:
        """Return role with permissions by exact slug."""

    async def get_by_name(self, name: str) -> RoleResult | None:
        """Return role whose name equals ``name`` case-insensitively."""

    async def slug_exists(self, slug: str) -> bool:
        """Return True if any role uses ``slug``."""

    async def list_roles(
        self,
        *,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
        sort: str = "created_at",
        descending: bool = True,
    ) -> RolePage:
        """Return a page of roles (search matches name or slug, case-insensitive)."""

    async def create_role(
        self,
        *,
        name: str,
        slug: str,
        description: str | None,
        status: str,
        grants: list[Grant],
    ) -> RoleResult:
        """Persist a role and its ordered grants; return it with permissions."""

    async def update_role(
        self,
        role_id: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        status: str | None = None,
    ) -> RoleResult | None:
        """Apply the given fields; return updated role or None if not found."""

    async def replace_permissions(
        self, role_id: str, grants: list[Grant]
    ) -> RoleResult | None:
        """Replace the role's whole permission list in one unit; None if role not found."""

    async def delete_role(self, role_id: str) -> bool:
        """Delete role and its grants; return False if not found."""


# Permission repository interface
class IPermissionRepository(Protocol):
    """Protocol for independently managed permission records."""

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        """Return permission by ID."""

    async def find(
        self, role_id: str, action: str, resource: str
    ) -> PermissionResult | None:
        """Return the grant (role, action, resource) if it exists."""

    async def list_permissions(
        self,
        *,
        search: str | None = None,
        role_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> PermissionPage:
        """Return a page of permissions (search matches action or resource)."""

    async def create_permission(
        self, *, role_id: str, action: str, resource: str
    ) -> PermissionResult:
        """Append a grant to the end of the role's permission list."""

    async def update_permission(
        self,
        permission_id: str,
        *,
        role_id: str,
        action: str,
        resource: str,
    ) -> PermissionResult | None:
        """Update grant fields; return None if not found."""

    async def delete_permission(self, permission_id: str) -> bool:
        """Delete grant; return False if not found."""


# Identity (user) repository interface
class IUserRepository(Protocol):
    """Protocol for identity storage (authorization-relevant subset of users)."""

    async def get_identity(self, user_id: str) -> IdentityResult | None:
        """Return identity with role and permissions eagerly loaded, or None."""

    async def authenticate(self, login: str, password: str) -> IdentityResult | None:
        """Return identity if login (username or email) and password match, else None."""

    async def find_conflict(self, username: str, email: str) -> str | None:
        """Return 'username' or 'email' if already registered, else None."""

    async def create_user(
        self,
        *,
        name: str,
        username: str,
        email: str,
        password: str,
        role_id: str,
        freelancer_status: str | None = None,
    ) -> IdentityResult:
        """Create user (password hashed by the repository); return identity."""

    async def update_status(self, user_id: str, status: str) -> IdentityResult | None:
        """Set account status; return None if not found."""

    async def set_freelancer_status(
        self,
        user_id: str,
        *,
        freelancer_status: str,
        admin_comment: str | None,
        approved_by: str,
    ) -> IdentityResult | None:
        """Record an admin approval decision; return None if not found."""

    async def delete_user(self, user_id: str) -> bool:
        """Delete user; return False if not found."""

    async def count_by_role(self, role_id: str) -> int:
        """Return number of identities referencing ``role_id``."""


# Generic collaborator contract for owned resources
@runtime_checkable
class OwnedResource(Protocol):
    """Anything carrying the identity that created it (category, service, job, ...)."""

    owner_id: str | None


class IResourceRepository(Protocol):
    """Protocol for the per-entity repositories that live outside this core."""

    async def get_by_id(self, resource_id: str) -> OwnedResource | None:
        """Return resource by ID, or None."""
