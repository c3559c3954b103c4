"""User repository. Reads return IdentityResult with the role and its permissions loaded."""

from __future__ import annotations

import asyncio

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from marketplace.application.dtos.user import IdentityResult
from marketplace.domain.enums import UserStatus
from marketplace.infrastructure.persistence.models.role import Role
from marketplace.infrastructure.persistence.models.user import User
from marketplace.infrastructure.persistence.repositories.base import BaseRepository
from marketplace.infrastructure.persistence.repositories.role_repo import role_to_result
from marketplace.infrastructure.security.password import (
    get_dummy_hash,
    get_password_hash,
    verify_password,
)
from marketplace.shared.utils.datetime import utc_now


def _user_to_identity(u: User) -> IdentityResult:
    """Map ORM User (role eagerly loaded) to IdentityResult."""
    return IdentityResult(
        id=u.id,
        name=u.name,
        username=u.username,
        email=u.email,
        role_id=u.role_id,
        status=u.status,
        is_verified=u.is_verified,
        freelancer_status=u.freelancer_status,
        role=role_to_result(u.role) if u.role is not None else None,
    )


class UserRepository(BaseRepository[User]):
    """User repository for the identity subset the authorization core needs."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    def _select_users(self):
        return (
            select(User)
            .options(selectinload(User.role).selectinload(Role.permissions))
            .execution_options(populate_existing=True)
        )

    async def _load_entity(self, user_id: str) -> User | None:
        result = await self.db.execute(self._select_users().where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_identity(self, user_id: str) -> IdentityResult | None:
        user = await self._load_entity(user_id)
        return _user_to_identity(user) if user else None

    async def authenticate(self, login: str, password: str) -> IdentityResult | None:
        """Match login against username or email; only active accounts may sign in.

        Unknown logins still pay for one bcrypt comparison so response time
        does not reveal which usernames exist.
        """
        normalized = login.strip().lower()
        result = await self.db.execute(
            self._select_users().where(
                or_(User.username == normalized, User.email == normalized)
            )
        )
        user = result.scalar_one_or_none()
        if user is None:
            dummy_hash = await get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        if user.status == UserStatus.INACTIVE.value:
            return None
        return _user_to_identity(user)

    async def find_conflict(self, username: str, email: str) -> str | None:
        result = await self.db.execute(
            select(User.username, User.email).where(
                or_(User.username == username, User.email == email)
            )
        )
        for row_username, row_email in result.all():
            if row_username == username:
                return "username"
            if row_email == email:
                return "email"
        return None

    async def create_user(
        self,
        *,
        name: str,
        username: str,
        email: str,
        password: str,
        role_id: str,
        freelancer_status: str | None = None,
    ) -> IdentityResult:
        """Create user with a bcrypt hash computed off the event loop."""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            name=name,
            username=username,
            email=email,
            hashed_password=hashed,
            role_id=role_id,
            status=UserStatus.ACTIVE.value,
            freelancer_status=freelancer_status,
        )
        created = await self.create(user)
        identity = await self.get_identity(created.id)
        assert identity is not None
        return identity

    async def update_status(self, user_id: str, status: str) -> IdentityResult | None:
        user = await self.get_entity_by_id(user_id)
        if user is None:
            return None
        user.status = status
        await self.flush()
        return await self.get_identity(user_id)

    async def set_freelancer_status(
        self,
        user_id: str,
        *,
        freelancer_status: str,
        admin_comment: str | None,
        approved_by: str,
    ) -> IdentityResult | None:
        user = await self.get_entity_by_id(user_id)
        if user is None:
            return None
        user.freelancer_status = freelancer_status
        user.admin_comment = admin_comment
        user.approved_by = approved_by
        user.approved_at = utc_now()
        await self.flush()
        return await self.get_identity(user_id)

    async def delete_user(self, user_id: str) -> bool:
        user = await self.get_entity_by_id(user_id)
        if user is None:
            return False
        await self.delete(user)
        return True

    async def count_by_role(self, role_id: str) -> int:
        total = await self.db.scalar(
            select(func.count(User.id)).where(User.role_id == role_id)
        )
        return int(total or 0)
