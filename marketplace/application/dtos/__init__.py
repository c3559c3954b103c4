"""Application DTOs (no ORM dependency)."""

from marketplace.application.dtos.permission import PermissionPage, PermissionResult
from marketplace.application.dtos.role import RolePage, RoleResult
from marketplace.application.dtos.user import AuthResult, IdentityResult

__all__ = [
    "AuthResult",
    "IdentityResult",
    "PermissionPage",
    "PermissionResult",
    "RolePage",
    "RoleResult",
]
