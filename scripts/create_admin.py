"""Create an admin identity (Postgres only). Run seed_rbac first.

Usage:
    python -m scripts.create_admin <username> <email> [password]
If password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys

from marketplace.core.config import get_settings
from marketplace.infrastructure.persistence.database import _ensure_engine, dispose_engine
from marketplace.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
)


async def main() -> None:
    """Create the admin user with the configured admin role."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_admin <username> <email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    username = sys.argv[1].strip().lower()
    email = sys.argv[2].strip().lower()
    password = sys.argv[3] if len(sys.argv) > 3 else secrets.token_urlsafe(12)

    settings = get_settings()
    session_factory = _ensure_engine()
    try:
        async with session_factory() as session:
            async with session.begin():
                role = await RoleRepository(session).get_by_slug(settings.admin_role_slug)
                if role is None:
                    print(
                        f"Role not found: {settings.admin_role_slug} (run scripts.seed_rbac)",
                        file=sys.stderr,
                    )
                    sys.exit(1)
                user_repo = UserRepository(session)
                conflict = await user_repo.find_conflict(username, email)
                if conflict is not None:
                    print(f"A user with this {conflict} already exists", file=sys.stderr)
                    sys.exit(1)
                user = await user_repo.create_user(
                    name=username,
                    username=username,
                    email=email,
                    password=password,
                    role_id=role.id,
                )
        print(f"Created admin: {user.id} ({username})")
        if len(sys.argv) <= 3:
            print(f"Password: {password}")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
