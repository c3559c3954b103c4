"""Permission set: the pure grant lookup plus CRUD for individual grants."""

from __future__ import annotations

from marketplace.application.dtos.permission import PermissionPage, PermissionResult
from marketplace.application.dtos.role import RoleResult
from marketplace.application.interfaces.repositories import (
    IPermissionRepository,
    IRoleRepository,
)
from marketplace.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from marketplace.domain.value_objects.core import Grant

_MSG_DUPLICATE_GRANT = "Role already has permission '%s'"


def has_permission(role: RoleResult, action: str, resource: str) -> bool:
    """Return True if the role's permission list holds an exact (action, resource) grant.

    Stored grants are already normalized (trimmed, lowercase); the queried pair
    is normalized the same way. There are no wildcards.
    """
    return any(
        Grant(p.action, p.resource).matches(action, resource) for p in role.permissions
    )


def to_grant(action: str, resource: str) -> Grant:
    """Build a normalized Grant, mapping malformed input to ValidationException."""
    try:
        return Grant(action, resource)
    except ValueError as e:
        raise ValidationException(str(e), field="action") from e


class PermissionService:
    """Create, update and delete grants that always point at an existing role."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        role_repo: IRoleRepository,
    ) -> None:
        self._repo = permission_repo
        self._roles = role_repo

    async def _require_role(self, role_id: str) -> None:
        if await self._roles.get_by_id(role_id) is None:
            raise ValidationException("Role not found", field="role_id")

    async def get_permission(self, permission_id: str) -> PermissionResult:
        permission = await self._repo.get_by_id(permission_id)
        if permission is None:
            raise ResourceNotFoundException("permission", permission_id)
        return permission

    async def list_permissions(
        self,
        *,
        search: str | None = None,
        role_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> PermissionPage:
        return await self._repo.list_permissions(
            search=search.strip() if search else None,
            role_id=role_id,
            skip=skip,
            limit=limit,
        )

    async def create_permission(
        self, role_id: str, action: str, resource: str
    ) -> PermissionResult:
        """Append a grant to a role.

        Raises:
            ValidationException: role does not exist or action/resource malformed.
            ConflictException: the role already holds this grant.
        """
        grant = to_grant(action, resource)
        await self._require_role(role_id)
        # Best-effort check; the unique constraint catches concurrent duplicates.
        if await self._repo.find(role_id, grant.action, grant.resource):
            raise ConflictException(_MSG_DUPLICATE_GRANT % grant, field="action")
        return await self._repo.create_permission(
            role_id=role_id, action=grant.action, resource=grant.resource
        )

    async def update_permission(
        self,
        permission_id: str,
        *,
        role_id: str | None = None,
        action: str | None = None,
        resource: str | None = None,
    ) -> PermissionResult:
        """Change any of role, action, resource; unspecified fields keep their value."""
        current = await self.get_permission(permission_id)
        target_role = role_id or current.role_id
        grant = to_grant(
            action if action is not None else current.action,
            resource if resource is not None else current.resource,
        )
        if target_role != current.role_id:
            await self._require_role(target_role)
        existing = await self._repo.find(target_role, grant.action, grant.resource)
        if existing is not None and existing.id != permission_id:
            raise ConflictException(_MSG_DUPLICATE_GRANT % grant, field="action")
        updated = await self._repo.update_permission(
            permission_id,
            role_id=target_role,
            action=grant.action,
            resource=grant.resource,
        )
        if updated is None:
            raise ResourceNotFoundException("permission", permission_id)
        return updated

    async def delete_permission(self, permission_id: str) -> PermissionResult:
        """Delete a grant; return the record as it was."""
        current = await self.get_permission(permission_id)
        if not await self._repo.delete_permission(permission_id):
            raise ResourceNotFoundException("permission", permission_id)
        return current
