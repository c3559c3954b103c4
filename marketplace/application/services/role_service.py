"""Role registry: role lifecycle with unique names, derived slugs and atomic grant replacement.

Writes are expected to run inside one transaction (get_db_transactional), so a
failure anywhere in update/replace leaves the stored role unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from marketplace.application.dtos.role import RolePage, RoleResult
from marketplace.application.interfaces.repositories import (
    IRoleRepository,
    IUserRepository,
)
from marketplace.application.services.permission_service import to_grant
from marketplace.domain.enums import RoleStatus
from marketplace.domain.exceptions import (
    ConflictException,
    InternalException,
    ResourceNotFoundException,
    ValidationException,
)
from marketplace.domain.value_objects.core import Grant, Slug

logger = logging.getLogger(__name__)

ROLE_SORT_FIELDS = ("name", "slug", "status", "created_at", "updated_at")

GrantInput = Grant | tuple[str, str]


def normalize_grants(grants: Iterable[GrantInput]) -> list[Grant]:
    """Validate every grant and drop duplicates, keeping first-seen order.

    Raises ValidationException on the first malformed entry, before anything
    is written.
    """
    seen: set[Grant] = set()
    ordered: list[Grant] = []
    for item in grants:
        grant = item if isinstance(item, Grant) else to_grant(*item)
        if grant not in seen:
            seen.add(grant)
            ordered.append(grant)
    return ordered


def _validate_status(status: str) -> str:
    if status not in RoleStatus.values():
        raise ValidationException(
            f"Status must be one of: {', '.join(RoleStatus.values())}", field="status"
        )
    return status


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationException("Role name is required", field="name")
    return cleaned


class RoleService:
    """Create, look up, update and delete roles."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        user_repo: IUserRepository | None = None,
        *,
        slug_max_attempts: int = 1000,
    ) -> None:
        self._roles = role_repo
        self._users = user_repo
        self._slug_max_attempts = slug_max_attempts

    async def find_by_id(self, role_id: str) -> RoleResult | None:
        return await self._roles.get_by_id(role_id)

    async def find_by_slug(self, slug: str) -> RoleResult | None:
        return await self._roles.get_by_slug(slug.strip().lower())

    async def get_role(self, role_id: str) -> RoleResult:
        role = await self._roles.get_by_id(role_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def get_role_by_slug(self, slug: str) -> RoleResult:
        role = await self.find_by_slug(slug)
        if role is None:
            raise ResourceNotFoundException("role", slug)
        return role

    async def list_roles(
        self,
        *,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
        sort: str = "created_at",
        order: str = "desc",
    ) -> RolePage:
        if sort not in ROLE_SORT_FIELDS:
            raise ValidationException(
                f"sort must be one of: {', '.join(ROLE_SORT_FIELDS)}", field="sort"
            )
        if order not in ("asc", "desc"):
            raise ValidationException("order must be 'asc' or 'desc'", field="order")
        return await self._roles.list_roles(
            search=search.strip() if search else None,
            skip=skip,
            limit=limit,
            sort=sort,
            descending=order == "desc",
        )

    async def create_role(
        self,
        name: str,
        *,
        description: str | None = None,
        status: str = RoleStatus.ACTIVE.value,
        permissions: Iterable[GrantInput] = (),
    ) -> RoleResult:
        """Create a role with a slug derived from its name.

        Raises:
            ValidationException: empty name, bad status, malformed grant, or a
                name with no slug-worthy characters.
            ConflictException: the name exists case-insensitively.
            InternalException: no free slug within slug_max_attempts.
        """
        name = _clean_name(name)
        _validate_status(status)
        grants = normalize_grants(permissions)
        if await self._roles.get_by_name(name) is not None:
            raise ConflictException("Role name already exists", field="name")
        slug = await self._unique_slug(name)
        role = await self._roles.create_role(
            name=name,
            slug=slug.value,
            description=description,
            status=status,
            grants=grants,
        )
        logger.info("Role created: id=%s slug=%s", role.id, role.slug)
        return role

    async def _unique_slug(self, name: str) -> Slug:
        """First free slug among base, base-1, base-2, ... within the attempt bound."""
        try:
            base = Slug.from_name(name)
        except ValueError as e:
            raise ValidationException(
                "Role name must contain at least one letter or digit", field="name"
            ) from e
        candidate = base
        for attempt in range(1, self._slug_max_attempts + 1):
            if not await self._roles.slug_exists(candidate.value):
                return candidate
            candidate = base.with_suffix(attempt)
        logger.error(
            "Slug generation exhausted %d attempts for base %r",
            self._slug_max_attempts,
            base.value,
        )
        raise InternalException(
            "Could not derive a unique role slug",
            base_slug=base.value,
            attempts=self._slug_max_attempts,
        )

    async def update_role(
        self,
        role_id: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        status: str | None = None,
        permissions: Iterable[GrantInput] | None = None,
    ) -> RoleResult:
        """Update fields and, when given, replace the whole permission list.

        Everything is validated before the first write; renames that collide
        with a different role raise ConflictException.
        """
        role = await self.get_role(role_id)
        new_name = None
        if name is not None:
            new_name = _clean_name(name)
            if new_name.lower() != role.name.lower():
                other = await self._roles.get_by_name(new_name)
                if other is not None and other.id != role.id:
                    raise ConflictException("Role name already exists", field="name")
        new_slug = None
        if slug is not None:
            try:
                new_slug = Slug.from_name(slug).value
            except ValueError as e:
                raise ValidationException(str(e), field="slug") from e
            if new_slug != role.slug and await self._roles.slug_exists(new_slug):
                raise ConflictException("Role slug already exists", field="slug")
        if status is not None:
            _validate_status(status)
        grants = normalize_grants(permissions) if permissions is not None else None

        updated = await self._roles.update_role(
            role_id,
            name=new_name,
            slug=new_slug,
            description=description,
            status=status,
        )
        if updated is None:
            raise ResourceNotFoundException("role", role_id)
        if grants is not None:
            updated = await self._replace(role_id, grants)
        logger.info("Role updated: id=%s", role_id)
        return updated

    async def replace_permissions(
        self, role_id: str, permissions: Iterable[GrantInput]
    ) -> RoleResult:
        """Replace the role's permission list as one unit (duplicates collapse)."""
        grants = normalize_grants(permissions)
        await self.get_role(role_id)
        role = await self._replace(role_id, grants)
        logger.info("Role permissions replaced: id=%s count=%d", role_id, len(grants))
        return role

    async def _replace(self, role_id: str, grants: list[Grant]) -> RoleResult:
        role = await self._roles.replace_permissions(role_id, grants)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def delete_role(self, role_id: str) -> RoleResult:
        """Delete an unreferenced role; return it as it was.

        Raises:
            ResourceNotFoundException: unknown id.
            ConflictException: identities still reference the role.
        """
        role = await self.get_role(role_id)
        if self._users is not None:
            assigned = await self._users.count_by_role(role_id)
            if assigned:
                raise ConflictException(
                    f"Role is assigned to {assigned} user(s) and cannot be deleted",
                    field="role_id",
                    assigned_users=assigned,
                )
        if not await self._roles.delete_role(role_id):
            raise ResourceNotFoundException("role", role_id)
        logger.info("Role deleted: id=%s slug=%s", role.id, role.slug)
        return role
