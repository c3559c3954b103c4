"""Admin state transitions on identities: account status, freelancer approval, deletion.

Callers authorize first (the 'approve' and 'delete' operations on 'user').
"""

from __future__ import annotations

import logging

from marketplace.application.dtos.user import IdentityResult
from marketplace.application.interfaces.repositories import IUserRepository
from marketplace.domain.enums import FreelancerStatus, SystemRole, UserStatus
from marketplace.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

# An approval decision is final in one of these two states.
FREELANCER_DECISIONS = (FreelancerStatus.APPROVED.value, FreelancerStatus.REJECTED.value)


class UserAdministrationService:
    """Apply admin decisions to identities."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self._users = user_repo

    async def get_identity(self, user_id: str) -> IdentityResult:
        identity = await self._users.get_identity(user_id)
        if identity is None:
            raise ResourceNotFoundException("identity", user_id, "User not found")
        return identity

    async def update_status(self, user_id: str, status: str) -> IdentityResult:
        if status not in UserStatus.values():
            raise ValidationException(
                f"Status must be one of: {', '.join(UserStatus.values())}",
                field="status",
            )
        await self.get_identity(user_id)
        updated = await self._users.update_status(user_id, status)
        if updated is None:
            raise ResourceNotFoundException("identity", user_id, "User not found")
        logger.info("User %s status set to %s", user_id, status)
        return updated

    async def set_freelancer_status(
        self,
        user_id: str,
        status: str,
        *,
        admin_id: str,
        admin_comment: str | None = None,
    ) -> IdentityResult:
        """Approve or reject a freelancer profile.

        Raises:
            ValidationException: status not approved/rejected, or the target
                identity is not a freelancer.
            ResourceNotFoundException: unknown identity.
        """
        if status not in FREELANCER_DECISIONS:
            raise ValidationException(
                f"Status must be one of: {', '.join(FREELANCER_DECISIONS)}",
                field="status",
            )
        target = await self.get_identity(user_id)
        if target.role is None or target.role.slug != SystemRole.FREELANCER.value:
            raise ValidationException("User is not a freelancer", field="user_id")
        updated = await self._users.set_freelancer_status(
            user_id,
            freelancer_status=status,
            admin_comment=admin_comment.strip() if admin_comment else None,
            approved_by=admin_id,
        )
        if updated is None:
            raise ResourceNotFoundException("identity", user_id, "User not found")
        logger.info("Freelancer %s %s by %s", user_id, status, admin_id)
        return updated

    async def delete_user(self, user_id: str) -> IdentityResult:
        """Delete an identity; return it as it was."""
        target = await self.get_identity(user_id)
        if not await self._users.delete_user(user_id):
            raise ResourceNotFoundException("identity", user_id, "User not found")
        logger.info("User deleted: id=%s", user_id)
        return target
