"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model: one (action, resource) grant owned by a role."""

    id: str
    role_id: str
    action: str
    resource: str


@dataclass(frozen=True)
class PermissionPage:
    """One page of permissions plus the total matching count."""

    items: list[PermissionResult]
    total: int
