"""Seed the default marketplace roles (admin, freelancer, client) and their grants.

Usage:
    python -m scripts.seed_rbac
Idempotent: existing roles keep their extra grants and only get missing
defaults added. Requires Postgres with migrations applied.
"""

import asyncio

from marketplace.application.services import RoleService, seed_default_roles
from marketplace.core.config import get_settings
from marketplace.infrastructure.persistence.database import _ensure_engine, dispose_engine
from marketplace.infrastructure.persistence.repositories import RoleRepository
from marketplace.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Seed default roles in one transaction."""
    settings = get_settings()
    setup_logging()
    session_factory = _ensure_engine()
    try:
        async with session_factory() as session:
            async with session.begin():
                service = RoleService(
                    RoleRepository(session),
                    slug_max_attempts=settings.slug_max_attempts,
                )
                outcome = await seed_default_roles(service)
        for slug, result in outcome.items():
            print(f"{slug}: {result}")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
