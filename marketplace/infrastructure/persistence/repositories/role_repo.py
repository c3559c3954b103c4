"""Role repository. Read methods return RoleResult (DTO) with the ordered permission set."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from marketplace.application.dtos.permission import PermissionResult
from marketplace.application.dtos.role import RolePage, RoleResult
from marketplace.domain.value_objects.core import Grant
from marketplace.infrastructure.persistence.models.permission import Permission
from marketplace.infrastructure.persistence.models.role import Role
from marketplace.infrastructure.persistence.repositories.base import BaseRepository

_SORT_COLUMNS: dict[str, Any] = {
    "name": Role.name,
    "slug": Role.slug,
    "status": Role.status,
    "created_at": Role.created_at,
    "updated_at": Role.updated_at,
}


def permission_to_result(p: Permission) -> PermissionResult:
    """Map ORM Permission to application PermissionResult."""
    return PermissionResult(
        id=p.id,
        role_id=p.role_id,
        action=p.action,
        resource=p.resource,
    )


def role_to_result(r: Role) -> RoleResult:
    """Map ORM Role (permissions loaded) to application RoleResult."""
    return RoleResult(
        id=r.id,
        name=r.name,
        slug=r.slug,
        status=r.status,
        description=r.description,
        permissions=tuple(permission_to_result(p) for p in r.permissions),
    )


class RoleRepository(BaseRepository[Role]):
    """Role repository. Every read returns the role with its permissions loaded."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    def _select_roles(self):
        return (
            select(Role)
            .options(selectinload(Role.permissions))
            .execution_options(populate_existing=True)
        )

    async def _one(self, *criteria: Any) -> RoleResult | None:
        result = await self.db.execute(self._select_roles().where(*criteria))
        row = result.scalar_one_or_none()
        return role_to_result(row) if row else None

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        return await self._one(Role.id == role_id)

    async def get_by_slug(self, slug: str) -> RoleResult | None:
        return await self._one(Role.slug == slug)

    async def get_by_name(self, name: str) -> RoleResult | None:
        return await self._one(func.lower(Role.name) == name.strip().lower())

    async def slug_exists(self, slug: str) -> bool:
        result = await self.db.execute(select(Role.id).where(Role.slug == slug).limit(1))
        return result.scalar_one_or_none() is not None

    async def list_roles(
        self,
        *,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
        sort: str = "created_at",
        descending: bool = True,
    ) -> RolePage:
        """Return a page of roles; search matches name or slug case-insensitively."""
        criteria = []
        if search:
            criteria.append(
                or_(
                    Role.name.icontains(search, autoescape=True),
                    Role.slug.icontains(search, autoescape=True),
                )
            )
        total = await self.db.scalar(select(func.count(Role.id)).where(*criteria))
        column = _SORT_COLUMNS.get(sort, Role.created_at)
        order = column.desc() if descending else column.asc()
        result = await self.db.execute(
            self._select_roles()
            .where(*criteria)
            .order_by(order, Role.id)
            .offset(skip)
            .limit(limit)
        )
        return RolePage(
            items=[role_to_result(r) for r in result.scalars().all()],
            total=int(total or 0),
        )

    async def create_role(
        self,
        *,
        name: str,
        slug: str,
        description: str | None,
        status: str,
        grants: list[Grant],
    ) -> RoleResult:
        """Create a role with its grants in order; return read-model DTO."""
        role = Role(
            name=name,
            slug=slug,
            description=description,
            status=status,
            permissions=[
                Permission(action=g.action, resource=g.resource, position=i)
                for i, g in enumerate(grants)
            ],
        )
        created = await self.create(role)
        loaded = await self.get_by_id(created.id)
        assert loaded is not None
        return loaded

    async def update_role(
        self,
        role_id: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        status: str | None = None,
    ) -> RoleResult | None:
        role = await self.get_entity_by_id(role_id)
        if role is None:
            return None
        if name is not None:
            role.name = name
        if slug is not None:
            role.slug = slug
        if description is not None:
            role.description = description
        if status is not None:
            role.status = status
        await self.flush()
        return await self.get_by_id(role_id)

    async def replace_permissions(
        self, role_id: str, grants: list[Grant]
    ) -> RoleResult | None:
        """Swap the whole permission list. Runs inside the caller's transaction.

        Old rows are deleted with a statement before the new ones are flushed so
        the (role, action, resource) constraint never sees both generations.
        """
        exists = await self.db.scalar(select(Role.id).where(Role.id == role_id))
        if exists is None:
            return None
        await self.db.execute(delete(Permission).where(Permission.role_id == role_id))
        self.db.add_all(
            Permission(
                role_id=role_id, action=g.action, resource=g.resource, position=i
            )
            for i, g in enumerate(grants)
        )
        await self.flush()
        return await self.get_by_id(role_id)

    async def delete_role(self, role_id: str) -> bool:
        role = await self.get_entity_by_id(role_id)
        if role is None:
            return False
        await self.delete(role)
        return True
