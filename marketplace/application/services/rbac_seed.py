"""Default marketplace roles and their grants; idempotent seeding through RoleService."""

from __future__ import annotations

import logging
from typing import TypedDict

from marketplace.application.services.role_service import RoleService
from marketplace.domain.enums import SystemRole

logger = logging.getLogger(__name__)


class RoleData(TypedDict):
    """Role configuration for default roles."""

    name: str
    description: str
    permissions: list[tuple[str, str]]


def _crud(resource: str, *actions: str) -> list[tuple[str, str]]:
    return [(action, resource) for action in actions]


DEFAULT_ROLES: dict[str, RoleData] = {
    SystemRole.ADMIN.value: {
        "name": "Admin",
        "description": "Marketplace administrator",
        "permissions": [
            *_crud("role", "create", "read", "update", "delete"),
            *_crud("permission", "create", "read", "update", "delete"),
            ("read", "user"),
        ],
    },
    SystemRole.FREELANCER.value: {
        "name": "Freelancer",
        "description": "Offers services and keeps a portfolio",
        "permissions": [
            *_crud("service", "create", "update", "delete"),
            *_crud("portfolio", "create", "update", "delete"),
        ],
    },
    SystemRole.CLIENT.value: {
        "name": "Client",
        "description": "Posts jobs and hires freelancers",
        "permissions": _crud("job", "create", "update", "delete"),
    },
}


async def seed_default_roles(
    roles: RoleService,
    defaults: dict[str, RoleData] | None = None,
) -> dict[str, str]:
    """Create missing default roles and add missing default grants to existing ones.

    Grants an operator added stay in place. Returns slug -> "created",
    "updated" or "unchanged".
    """
    outcome: dict[str, str] = {}
    for slug, data in (defaults or DEFAULT_ROLES).items():
        existing = await roles.find_by_slug(slug)
        if existing is None:
            role = await roles.create_role(
                data["name"],
                description=data["description"],
                permissions=data["permissions"],
            )
            if role.slug != slug:
                logger.warning("Seeded role %r got slug %r", slug, role.slug)
            outcome[slug] = "created"
            continue
        held = {(p.action, p.resource) for p in existing.permissions}
        missing = [g for g in data["permissions"] if g not in held]
        if not missing:
            outcome[slug] = "unchanged"
            continue
        current = [(p.action, p.resource) for p in existing.permissions]
        await roles.replace_permissions(existing.id, current + missing)
        outcome[slug] = "updated"
    logger.info("Default roles seeded: %s", outcome)
    return outcome
