"""Domain enumerations for the marketplace application.

Enums represent fixed sets of domain values (role status, account status,
freelancer approval state, access operations).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class RoleStatus(_ValuesMixin, str, Enum):
    """Role lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class UserStatus(_ValuesMixin, str, Enum):
    """Account status of an identity.

    Suspended identities still resolve but are denied every gated operation.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class FreelancerStatus(_ValuesMixin, str, Enum):
    """Admin approval state of a freelancer profile."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApprovalStatus(_ValuesMixin, str, Enum):
    """Approval state of moderated listings (categories, services)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PermissionAction(_ValuesMixin, str, Enum):
    """Canonical permission verbs. Actions are open strings; these are the common case."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class AccessOperation(_ValuesMixin, str, Enum):
    """Operation kinds a resource access policy is evaluated for."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"


class SystemRole(_ValuesMixin, str, Enum):
    """Slugs of the built-in roles the platform relies on."""

    ADMIN = "admin"
    FREELANCER = "freelancer"
    CLIENT = "client"
