"""Base repository: generic entity access plus flush-time conflict mapping."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.domain.exceptions import ConflictException
from marketplace.infrastructure.persistence.database import Base

# Constraint name -> (message, field) for unique violations raised at flush.
_UNIQUE_CONSTRAINTS: dict[str, tuple[str, str]] = {
    "role_slug_key": ("Role slug already exists", "slug"),
    "uq_role_name_lower": ("Role name already exists", "name"),
    "uq_permission_grant": ("Permission already granted to this role", "action"),
    "app_user_username_key": ("Username is already in use", "username"),
    "app_user_email_key": ("Email is already in use", "email"),
}


def _conflict_from_integrity_error(exc: IntegrityError) -> ConflictException | None:
    """Map a unique-violation IntegrityError to ConflictException, else None."""
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    for constraint, (message, field) in _UNIQUE_CONSTRAINTS.items():
        if constraint in detail:
            return ConflictException(message, field=field)
    return None


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_entity_by_id, create, save, delete.

    Read methods on subclasses return DTOs; entity getters return ORM objects
    for updates within the same session.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_entity_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and refresh server defaults."""
        self.db.add(obj)
        await self.flush()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and refresh it."""
        await self.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record and flush."""
        await self.db.delete(obj)
        await self.flush()

    async def flush(self) -> None:
        """Flush the session, turning unique violations into ConflictException.

        Check-then-write races between concurrent requests surface here.
        """
        try:
            await self.db.flush()
        except IntegrityError as exc:
            conflict = _conflict_from_integrity_error(exc)
            if conflict is None:
                raise
            raise conflict from exc
