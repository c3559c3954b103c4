"""Authorization requirements: the tagged variant evaluated by the gate.

Each requirement kind is an immutable dataclass; ``Requirement`` is their
union. Handlers never compare role names or permission strings themselves,
they build a requirement (usually through a resource access policy) and hand
it to ``AuthorizationGate``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

@dataclass(frozen=True)
class AuthenticatedRequirement:
    """Passes for any resolved identity."""

    kind: ClassVar[str] = "Authenticated"


@dataclass(frozen=True)
class RoleSlugRequirement:
    """Passes iff the identity's role slug equals ``slug``."""

    slug: str

    kind: ClassVar[str] = "RoleSlug"


@dataclass(frozen=True)
class PermissionRequirement:
    """Passes iff the identity's role grants (action, resource)."""

    action: str
    resource: str

    kind: ClassVar[str] = "Permission"


@dataclass(frozen=True)
class OwnerRequirement:
    """Passes iff the target resource's owner is the acting identity.

    ``owner_id`` is the owner field of the loaded resource; ``None`` (ownerless
    resource) never matches.
    """

    owner_id: str | None
    resource_type: str | None = None

    kind: ClassVar[str] = "Owner"


@dataclass(frozen=True)
class OwnerOrAdminRequirement:
    """Passes iff Owner passes or the identity holds the admin role."""

    owner_id: str | None
    resource_type: str | None = None
    admin_slug: str = "admin"

    kind: ClassVar[str] = "OwnerOrAdmin"


@dataclass(frozen=True)
class AnyOf:
    """Passes at the first member that passes (short-circuit)."""

    requirements: tuple[Requirement, ...]

    kind: ClassVar[str] = "AnyOf"

    def __init__(self, *requirements: Requirement) -> None:
        if not requirements:
            raise ValueError("AnyOf needs at least one requirement")
        object.__setattr__(self, "requirements", tuple(requirements))


@dataclass(frozen=True)
class AllOf:
    """Fails at the first member that fails (short-circuit)."""

    requirements: tuple[Requirement, ...]

    kind: ClassVar[str] = "AllOf"

    def __init__(self, *requirements: Requirement) -> None:
        if not requirements:
            raise ValueError("AllOf needs at least one requirement")
        object.__setattr__(self, "requirements", tuple(requirements))


Requirement = (
    AuthenticatedRequirement
    | RoleSlugRequirement
    | PermissionRequirement
    | OwnerRequirement
    | OwnerOrAdminRequirement
    | AnyOf
    | AllOf
)
