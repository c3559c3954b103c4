"""Persistence repositories: SQLAlchemy implementations of the application ports."""

from marketplace.infrastructure.persistence.repositories.base import BaseRepository
from marketplace.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from marketplace.infrastructure.persistence.repositories.role_repo import RoleRepository
from marketplace.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]
