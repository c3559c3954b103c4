"""Tests for ResourceAccessPolicy: default table, admin override, ownership, visibility."""

from dataclasses import dataclass

import pytest

from marketplace.application.dtos.role import RoleResult
from marketplace.application.dtos.user import IdentityResult
from marketplace.application.services.access_policy import (
    OwnershipRule,
    ResourceAccessPolicy,
    ResourcePolicy,
    VisibilityFilter,
    build_default_policies,
)
from marketplace.application.services.authorization_service import AuthorizationGate
from marketplace.domain.exceptions import AuthenticationException, AuthorizationException
from marketplace.domain.requirements import (
    AnyOf,
    AuthenticatedRequirement,
    OwnerOrAdminRequirement,
    OwnerRequirement,
    PermissionRequirement,
    RoleSlugRequirement,
)


@dataclass
class Owned:
    owner_id: str | None
    status: str = "pending"


def _identity(user_id: str, slug: str) -> IdentityResult:
    role = RoleResult(id=f"r-{slug}", name=slug, slug=slug, status="active")
    return IdentityResult(
        id=user_id,
        name=user_id,
        username=user_id,
        email=f"{user_id}@example.com",
        role_id=role.id,
        status="active",
        is_verified=True,
        freelancer_status=None,
        role=role,
    )


ADMIN = _identity("a1", "admin")
FREELANCER = _identity("f1", "freelancer")
CLIENT = _identity("c1", "client")


@pytest.fixture
def policy() -> ResourceAccessPolicy:
    return ResourceAccessPolicy(AuthorizationGate())


def test_default_table_covers_marketplace_resources() -> None:
    assert set(build_default_policies()) == {
        "role",
        "permission",
        "user",
        "category",
        "category_request",
        "service",
        "job",
        "review",
        "portfolio",
        "inquiry",
        "message",
        "favorite",
        "notification",
        "task",
    }


def test_public_read_has_no_requirement(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("role", "read") is None
    policy.authorize(None, "service", "read")


def test_role_writes_need_permission_without_override(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("role", "create") == PermissionRequirement("create", "role")
    assert policy.requirement_for("role", "delete") == PermissionRequirement("delete", "role")


def test_permission_reads_are_gated(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("permission", "read") == PermissionRequirement(
        "read", "permission"
    )
    with pytest.raises(AuthenticationException):
        policy.authorize(None, "permission", "read")


def test_admin_override_wraps_role_slug(policy: ResourceAccessPolicy) -> None:
    requirement = policy.requirement_for("service", "create")
    assert requirement == AnyOf(
        RoleSlugRequirement("freelancer"), RoleSlugRequirement("admin")
    )
    assert policy.is_allowed(FREELANCER, "service", "create")
    assert policy.is_allowed(ADMIN, "service", "create")
    assert not policy.is_allowed(CLIENT, "service", "create")


def test_admin_only_requirement_is_not_double_wrapped(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("category", "create") == RoleSlugRequirement("admin")


def test_authenticated_create(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("review", "create") == AuthenticatedRequirement()
    assert policy.is_allowed(CLIENT, "review", "create")
    with pytest.raises(AuthenticationException):
        policy.authorize(None, "review", "create")


def test_approve_is_always_admin(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("service", "approve") == RoleSlugRequirement("admin")
    resource = Owned(owner_id="f1")
    assert not policy.is_allowed(FREELANCER, "service", "approve", resource)
    assert policy.is_allowed(ADMIN, "service", "approve", resource)


def test_owner_with_override_becomes_owner_or_admin(policy: ResourceAccessPolicy) -> None:
    job = Owned(owner_id="c1")
    assert policy.requirement_for("job", "update", job) == OwnerOrAdminRequirement(
        "c1", "job"
    )
    assert policy.is_allowed(CLIENT, "job", "update", job)
    assert policy.is_allowed(ADMIN, "job", "update", job)
    assert not policy.is_allowed(_identity("c2", "client"), "job", "update", job)


def test_owner_without_override_excludes_admin(policy: ResourceAccessPolicy) -> None:
    message = Owned(owner_id="c1")
    assert policy.requirement_for("message", "delete", message) == OwnerRequirement(
        "c1", "message"
    )
    assert not policy.is_allowed(ADMIN, "message", "delete", message)


def test_mapping_resources_are_accepted(policy: ResourceAccessPolicy) -> None:
    assert policy.is_allowed(CLIENT, "inquiry", "update", {"owner_id": "c1"})


def test_ownership_rule_needs_loaded_resource(policy: ResourceAccessPolicy) -> None:
    with pytest.raises(ValueError):
        policy.requirement_for("job", "update")
    with pytest.raises(ValueError):
        policy.is_allowed(CLIENT, "job", "update")


def test_non_public_listing_requires_sign_in(policy: ResourceAccessPolicy) -> None:
    assert policy.requirement_for("job", "read") == AuthenticatedRequirement()
    assert policy.requirement_for("portfolio", "read", Owned("f1")) == AuthenticatedRequirement()


def test_non_public_instance_read_requires_owner(policy: ResourceAccessPolicy) -> None:
    inquiry = Owned(owner_id="c1")
    assert policy.is_allowed(CLIENT, "inquiry", "read", inquiry)
    assert not policy.is_allowed(FREELANCER, "inquiry", "read", inquiry)


def test_unknown_resource_type_fails_closed(policy: ResourceAccessPolicy) -> None:
    with pytest.raises(AuthorizationException):
        policy.authorize(ADMIN, "spaceship", "read")
    assert not policy.is_allowed(ADMIN, "spaceship", "read")


def test_unknown_operation_is_rejected(policy: ResourceAccessPolicy) -> None:
    with pytest.raises(ValueError):
        policy.requirement_for("role", "launch")


def test_visibility_filter_for_non_admins(policy: ResourceAccessPolicy) -> None:
    visibility = policy.visibility_for("service", FREELANCER)
    assert visibility == VisibilityFilter(
        field="status", allowed=frozenset({"approved"}), owner_id="f1"
    )
    assert visibility.allows(Owned(owner_id="x", status="approved"))
    assert visibility.allows(Owned(owner_id="f1", status="pending"))
    assert not visibility.allows(Owned(owner_id="x", status="pending"))


def test_visibility_filter_anonymous_and_admin(policy: ResourceAccessPolicy) -> None:
    anonymous = policy.visibility_for("user", None)
    assert anonymous is not None and anonymous.owner_id is None
    assert anonymous.allows({"status": "active"})
    assert not anonymous.allows({"status": "suspended"})
    assert policy.visibility_for("service", ADMIN) is None
    assert policy.visibility_for("job", CLIENT) is None


def test_custom_policy_table_and_admin_slug() -> None:
    policy = ResourceAccessPolicy(
        AuthorizationGate(),
        {"doc": ResourcePolicy("doc", update_requires=OwnershipRule.OWNER)},
        admin_slug="root",
    )
    root = _identity("r1", "root")
    assert policy.is_allowed(root, "doc", "update", Owned(owner_id="someone"))
    assert not policy.is_allowed(ADMIN, "doc", "update", Owned(owner_id="someone"))
