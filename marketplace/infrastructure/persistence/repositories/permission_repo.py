"""Permission repository. Grants are managed individually here and in bulk via RoleRepository."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.dtos.permission import PermissionPage, PermissionResult
from marketplace.infrastructure.persistence.models.permission import Permission
from marketplace.infrastructure.persistence.repositories.base import BaseRepository
from marketplace.infrastructure.persistence.repositories.role_repo import permission_to_result


class PermissionRepository(BaseRepository[Permission]):
    """Permission repository. Read methods return PermissionResult."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def _next_position(self, role_id: str) -> int:
        current = await self.db.scalar(
            select(func.max(Permission.position)).where(Permission.role_id == role_id)
        )
        return 0 if current is None else current + 1

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        entity = await self.get_entity_by_id(permission_id)
        return permission_to_result(entity) if entity else None

    async def find(
        self, role_id: str, action: str, resource: str
    ) -> PermissionResult | None:
        result = await self.db.execute(
            select(Permission).where(
                Permission.role_id == role_id,
                Permission.action == action,
                Permission.resource == resource,
            )
        )
        row = result.scalar_one_or_none()
        return permission_to_result(row) if row else None

    async def list_permissions(
        self,
        *,
        search: str | None = None,
        role_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> PermissionPage:
        criteria = []
        if role_id:
            criteria.append(Permission.role_id == role_id)
        if search:
            criteria.append(
                or_(
                    Permission.action.icontains(search, autoescape=True),
                    Permission.resource.icontains(search, autoescape=True),
                )
            )
        total = await self.db.scalar(select(func.count(Permission.id)).where(*criteria))
        result = await self.db.execute(
            select(Permission)
            .where(*criteria)
            .order_by(Permission.created_at.desc(), Permission.id)
            .offset(skip)
            .limit(limit)
        )
        return PermissionPage(
            items=[permission_to_result(p) for p in result.scalars().all()],
            total=int(total or 0),
        )

    async def create_permission(
        self, *, role_id: str, action: str, resource: str
    ) -> PermissionResult:
        """Append the grant at the end of the role's list."""
        permission = Permission(
            role_id=role_id,
            action=action,
            resource=resource,
            position=await self._next_position(role_id),
        )
        created = await self.create(permission)
        return permission_to_result(created)

    async def update_permission(
        self,
        permission_id: str,
        *,
        role_id: str,
        action: str,
        resource: str,
    ) -> PermissionResult | None:
        permission = await self.get_entity_by_id(permission_id)
        if permission is None:
            return None
        if permission.role_id != role_id:
            permission.position = await self._next_position(role_id)
            permission.role_id = role_id
        permission.action = action
        permission.resource = resource
        updated = await self.save(permission)
        return permission_to_result(updated)

    async def delete_permission(self, permission_id: str) -> bool:
        permission = await self.get_entity_by_id(permission_id)
        if permission is None:
            return False
        await self.delete(permission)
        return True
