"""Sign-up and sign-in: issue bearer credentials for marketplace identities."""

from __future__ import annotations

import logging

from marketplace.application.dtos.user import AuthResult
from marketplace.application.interfaces.repositories import (
    IRoleRepository,
    IUserRepository,
)
from marketplace.application.interfaces.services import ITokenService
from marketplace.domain.enums import FreelancerStatus, SystemRole
from marketplace.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Roles a visitor may pick at sign-up; admin is never self-assigned.
SIGNUP_ROLES = (SystemRole.FREELANCER.value, SystemRole.CLIENT.value)
MIN_PASSWORD_LENGTH = 8


class AuthService:
    """Register identities and exchange credentials for access tokens."""

    def __init__(
        self,
        user_repo: IUserRepository,
        role_repo: IRoleRepository,
        token_service: ITokenService,
    ) -> None:
        self._users = user_repo
        self._roles = role_repo
        self._tokens = token_service

    async def sign_up(
        self,
        *,
        name: str,
        username: str,
        email: str,
        password: str,
        role: str,
    ) -> AuthResult:
        """Create an identity with the chosen role and return it with a token.

        Raises:
            ValidationException: bad role choice or short password.
            ResourceNotFoundException: the chosen role is not seeded.
            ConflictException: username or email already registered.
        """
        role_slug = role.strip().lower()
        if role_slug not in SIGNUP_ROLES:
            raise ValidationException(
                f"Role must be one of: {', '.join(SIGNUP_ROLES)}", field="role"
            )
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        role_record = await self._roles.get_by_slug(role_slug)
        if role_record is None:
            logger.warning("Sign-up role %r is not seeded", role_slug)
            raise ResourceNotFoundException("role", role_slug, "User role not found.")

        username = username.strip().lower()
        email = email.strip().lower()
        conflict = await self._users.find_conflict(username, email)
        if conflict is not None:
            raise ConflictException(
                f"{conflict.capitalize()} is already in use", field=conflict
            )
        identity = await self._users.create_user(
            name=name.strip(),
            username=username,
            email=email,
            password=password,
            role_id=role_record.id,
            freelancer_status=(
                FreelancerStatus.PENDING.value
                if role_slug == SystemRole.FREELANCER.value
                else None
            ),
        )
        logger.info("Identity registered: id=%s role=%s", identity.id, role_slug)
        return AuthResult(
            identity=identity,
            access_token=self._tokens.create_access_token(identity.id),
        )

    async def sign_in(self, login: str, password: str) -> AuthResult:
        """Authenticate by username or email; failures are deliberately generic."""
        identity = await self._users.authenticate(login, password)
        if identity is None:
            raise AuthenticationException(AuthenticationException.CREDENTIALS)
        return AuthResult(
            identity=identity,
            access_token=self._tokens.create_access_token(identity.id),
        )
