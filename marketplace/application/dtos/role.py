"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass, field

from marketplace.application.dtos.permission import PermissionResult


@dataclass(frozen=True)
class RoleResult:
    """Role read-model with its ordered permission set loaded.

    Persisted shape consumed by the gate: {id, name, slug, status, permissions}.
    """

    id: str
    name: str
    slug: str
    status: str
    description: str | None = None
    permissions: tuple[PermissionResult, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RolePage:
    """One page of roles plus the total matching count."""

    items: list[RoleResult]
    total: int
