"""Persistence models: ORM entities and mixins."""

from marketplace.infrastructure.persistence.models.mixins import (
    CuidMixin,
    EntityModel,
    TimestampMixin,
)
from marketplace.infrastructure.persistence.models.permission import Permission
from marketplace.infrastructure.persistence.models.role import Role
from marketplace.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "EntityModel",
    "Permission",
    "Role",
    "TimestampMixin",
    "User",
]
