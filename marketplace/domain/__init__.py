"""Domain layer: value objects, requirements, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from marketplace.domain.enums import (
    AccessOperation,
    FreelancerStatus,
    RoleStatus,
    SystemRole,
    UserStatus,
)
from marketplace.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InternalException,
    MarketplaceException,
    ResourceNotFoundException,
    RoleNotFoundException,
    ServiceUnavailableException,
    ValidationException,
)
from marketplace.domain.value_objects import Grant, Slug, slugify

__all__ = [
    # Enums
    "AccessOperation",
    "FreelancerStatus",
    "RoleStatus",
    "SystemRole",
    "UserStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "InternalException",
    "MarketplaceException",
    "ResourceNotFoundException",
    "RoleNotFoundException",
    "ServiceUnavailableException",
    "ValidationException",
    # Value objects
    "Grant",
    "Slug",
    "slugify",
]
