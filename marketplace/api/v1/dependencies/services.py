"""Application service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from marketplace.application.interfaces.services import ITokenService
from marketplace.application.services.auth_service import AuthService
from marketplace.application.services.permission_service import PermissionService
from marketplace.application.services.role_service import RoleService
from marketplace.application.services.user_service import UserAdministrationService
from marketplace.core.config import get_settings
from marketplace.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
)

from .auth import get_token_service
from .db import (
    get_permission_repo,
    get_permission_repo_for_write,
    get_role_repo,
    get_role_repo_for_write,
    get_user_repo_for_write,
)


def get_role_reader(
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
) -> RoleService:
    """Role service over the read session (list, get)."""
    return RoleService(role_repo, slug_max_attempts=get_settings().slug_max_attempts)


def get_role_service(
    role_repo: Annotated[RoleRepository, Depends(get_role_repo_for_write)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
) -> RoleService:
    """Role service for create/update/delete (one transaction)."""
    return RoleService(
        role_repo, user_repo, slug_max_attempts=get_settings().slug_max_attempts
    )


def get_permission_reader(
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
) -> PermissionService:
    """Permission service over the read session."""
    return PermissionService(permission_repo, role_repo)


def get_permission_service(
    permission_repo: Annotated[
        PermissionRepository, Depends(get_permission_repo_for_write)
    ],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo_for_write)],
) -> PermissionService:
    """Permission service for create/update/delete (one transaction)."""
    return PermissionService(permission_repo, role_repo)


def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo_for_write)],
    token_service: Annotated[ITokenService, Depends(get_token_service)],
) -> AuthService:
    """Sign-up / sign-in service (composition root)."""
    return AuthService(user_repo, role_repo, token_service)


def get_user_admin_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
) -> UserAdministrationService:
    """Admin state transitions on identities."""
    return UserAdministrationService(user_repo)
