"""Resource access policies: per-resource-type rules that produce gate requirements.

A ResourcePolicy is configuration data. ResourceAccessPolicy turns
(resource type, operation, optional loaded resource) into a Requirement and
hands it to the AuthorizationGate. Public reads produce no requirement at all.

Visibility filters are a separate, query-shaping concern: the gate decides
whether a listing may be served, the filter decides which records are in it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from marketplace.application.dtos.user import IdentityResult
from marketplace.application.services.authorization_service import AuthorizationGate
from marketplace.domain.enums import AccessOperation, ApprovalStatus, SystemRole, UserStatus
from marketplace.domain.exceptions import AuthorizationException
from marketplace.domain.requirements import (
    AnyOf,
    AuthenticatedRequirement,
    OwnerOrAdminRequirement,
    OwnerRequirement,
    PermissionRequirement,
    Requirement,
    RoleSlugRequirement,
)


class OwnershipRule(str, Enum):
    """Write rules resolved against the loaded resource's owner."""

    OWNER = "owner"
    OWNER_OR_ADMIN = "owner-or-admin"


WriteRule = Requirement | OwnershipRule


@dataclass(frozen=True)
class ResourcePolicy:
    """Access rules for one resource type.

    ``delete_requires`` falls back to ``update_requires`` when None.
    ``visible_statuses`` enables a visibility filter for non-admin listings.
    """

    resource_type: str
    public_read: bool = False
    read_requires: Requirement | None = None
    create_requires: Requirement = AuthenticatedRequirement()
    update_requires: WriteRule = OwnershipRule.OWNER_OR_ADMIN
    delete_requires: WriteRule | None = None
    admin_override: bool = True
    visible_statuses: frozenset[str] | None = None
    status_field: str = "status"


@dataclass(frozen=True)
class VisibilityFilter:
    """Which records a non-admin listing may include: allowed status, or owned."""

    field: str
    allowed: frozenset[str]
    owner_id: str | None = None

    def allows(self, record: Any) -> bool:
        """Apply the filter to one loaded record (mapping or object)."""
        if self.owner_id is not None and _owner_of(record) == self.owner_id:
            return True
        return _field_of(record, self.field) in self.allowed


def _field_of(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _owner_of(resource: Any) -> str | None:
    owner = _field_of(resource, "owner_id")
    return str(owner) if owner is not None else None


def build_default_policies(
    admin_slug: str = SystemRole.ADMIN.value,
) -> dict[str, ResourcePolicy]:
    """Default rule table for the marketplace's resource types."""
    admin = RoleSlugRequirement(admin_slug)
    approved = frozenset({ApprovalStatus.APPROVED.value})
    policies = [
        ResourcePolicy(
            "role",
            public_read=True,
            create_requires=PermissionRequirement("create", "role"),
            update_requires=PermissionRequirement("update", "role"),
            delete_requires=PermissionRequirement("delete", "role"),
            admin_override=False,
        ),
        ResourcePolicy(
            "permission",
            read_requires=PermissionRequirement("read", "permission"),
            create_requires=PermissionRequirement("create", "permission"),
            update_requires=PermissionRequirement("update", "permission"),
            delete_requires=PermissionRequirement("delete", "permission"),
            admin_override=False,
        ),
        ResourcePolicy(
            "user",
            public_read=True,
            update_requires=admin,
            delete_requires=admin,
            visible_statuses=frozenset({UserStatus.ACTIVE.value}),
        ),
        ResourcePolicy(
            "category",
            public_read=True,
            create_requires=admin,
            update_requires=admin,
            delete_requires=admin,
            visible_statuses=approved,
        ),
        ResourcePolicy(
            "category_request",
            update_requires=OwnershipRule.OWNER,
            delete_requires=OwnershipRule.OWNER,
        ),
        ResourcePolicy(
            "service",
            public_read=True,
            create_requires=RoleSlugRequirement(SystemRole.FREELANCER.value),
            visible_statuses=approved,
        ),
        ResourcePolicy(
            "job",
            create_requires=RoleSlugRequirement(SystemRole.CLIENT.value),
            update_requires=OwnershipRule.OWNER,
        ),
        ResourcePolicy("review", public_read=True, update_requires=OwnershipRule.OWNER),
        ResourcePolicy(
            "portfolio",
            read_requires=AuthenticatedRequirement(),
            update_requires=OwnershipRule.OWNER,
        ),
        ResourcePolicy("inquiry", update_requires=OwnershipRule.OWNER),
        ResourcePolicy(
            "message",
            update_requires=OwnershipRule.OWNER,
            delete_requires=OwnershipRule.OWNER,
            admin_override=False,
        ),
        ResourcePolicy(
            "favorite",
            update_requires=OwnershipRule.OWNER,
            delete_requires=OwnershipRule.OWNER,
            admin_override=False,
        ),
        ResourcePolicy(
            "notification",
            update_requires=OwnershipRule.OWNER,
            delete_requires=OwnershipRule.OWNER,
        ),
        ResourcePolicy("task"),
    ]
    return {p.resource_type: p for p in policies}


class ResourceAccessPolicy:
    """Resolve requirements from the policy table and evaluate them with the gate."""

    def __init__(
        self,
        gate: AuthorizationGate,
        policies: Mapping[str, ResourcePolicy] | None = None,
        *,
        admin_slug: str = SystemRole.ADMIN.value,
    ) -> None:
        self._gate = gate
        self._admin_slug = admin_slug
        self._policies = dict(
            policies if policies is not None else build_default_policies(admin_slug)
        )

    def policy_for(self, resource_type: str) -> ResourcePolicy:
        """Return the policy for ``resource_type``; unknown types are Forbidden."""
        policy = self._policies.get(resource_type)
        if policy is None:
            raise AuthorizationException(
                message=f"Access denied: no access policy for '{resource_type}'"
            )
        return policy

    def requirement_for(
        self,
        resource_type: str,
        operation: AccessOperation | str,
        resource: Any = None,
    ) -> Requirement | None:
        """Return the requirement for the operation, or None for a public read.

        ``resource`` is the loaded instance (anything with ``owner_id``); it
        is required whenever the rule is ownership based.
        """
        op = AccessOperation(operation)
        policy = self.policy_for(resource_type)
        if op is AccessOperation.APPROVE:
            # Ownership never substitutes for approval authority.
            return RoleSlugRequirement(self._admin_slug)
        if op is AccessOperation.CREATE:
            return self._with_override(policy, policy.create_requires)
        if op is AccessOperation.READ:
            if policy.public_read:
                return None
            if policy.read_requires is not None:
                return self._with_override(policy, policy.read_requires)
            if resource is None:
                return AuthenticatedRequirement()
            return self._ownership(policy, OwnershipRule.OWNER, resource, op)
        rule = policy.update_requires
        if op is AccessOperation.DELETE and policy.delete_requires is not None:
            rule = policy.delete_requires
        if isinstance(rule, OwnershipRule):
            return self._ownership(policy, rule, resource, op)
        return self._with_override(policy, rule)

    def authorize(
        self,
        identity: IdentityResult | None,
        resource_type: str,
        operation: AccessOperation | str,
        resource: Any = None,
    ) -> None:
        """Raise unless ``identity`` may perform ``operation`` on the resource type."""
        requirement = self.requirement_for(resource_type, operation, resource)
        if requirement is None:
            return
        self._gate.authorize(identity, requirement)

    def is_allowed(
        self,
        identity: IdentityResult | None,
        resource_type: str,
        operation: AccessOperation | str,
        resource: Any = None,
    ) -> bool:
        """Non-raising form of authorize(); an unknown resource type is False.

        Still raises NotFound(role) like the gate, and ValueError for an unknown
        operation or an ownership rule evaluated without the loaded resource.
        """
        try:
            requirement = self.requirement_for(resource_type, operation, resource)
        except AuthorizationException:
            return False
        if requirement is None:
            return True
        return self._gate.is_allowed(identity, requirement)

    def visibility_for(
        self, resource_type: str, identity: IdentityResult | None
    ) -> VisibilityFilter | None:
        """Return the listing filter for non-admins, or None when everything is visible."""
        policy = self.policy_for(resource_type)
        if policy.visible_statuses is None:
            return None
        if identity is not None and identity.role is not None:
            if identity.role.slug == self._admin_slug:
                return None
        return VisibilityFilter(
            field=policy.status_field,
            allowed=policy.visible_statuses,
            owner_id=identity.id if identity is not None else None,
        )

    def _with_override(self, policy: ResourcePolicy, requirement: Requirement) -> Requirement:
        if not policy.admin_override or isinstance(requirement, AuthenticatedRequirement):
            return requirement
        if requirement == RoleSlugRequirement(self._admin_slug):
            return requirement
        return AnyOf(requirement, RoleSlugRequirement(self._admin_slug))

    def _ownership(
        self,
        policy: ResourcePolicy,
        rule: OwnershipRule,
        resource: Any,
        op: AccessOperation,
    ) -> Requirement:
        if resource is None:
            raise ValueError(
                f"'{op.value}' on '{policy.resource_type}' needs the loaded resource "
                "to check ownership"
            )
        owner_id = _owner_of(resource)
        if rule is OwnershipRule.OWNER_OR_ADMIN or policy.admin_override:
            return OwnerOrAdminRequirement(
                owner_id, policy.resource_type, admin_slug=self._admin_slug
            )
        return OwnerRequirement(owner_id, policy.resource_type)
