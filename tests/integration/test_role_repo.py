"""Role repository integration tests. Require Postgres; session is rolled back after each test."""

import uuid

import pytest

from marketplace.domain.exceptions import ConflictException
from marketplace.domain.value_objects.core import Grant, Slug
from marketplace.infrastructure.persistence.repositories.role_repo import RoleRepository


def _name(prefix: str) -> str:
    return f"{prefix} {uuid.uuid4().hex[:10]}"


async def _create(repo: RoleRepository, name: str, grants: list[Grant]):
    return await repo.create_role(
        name=name,
        slug=Slug.from_name(name).value,
        description=None,
        status="active",
        grants=grants,
    )


def _pairs(role) -> list[tuple[str, str]]:
    return [(p.action, p.resource) for p in role.permissions]


@pytest.mark.requires_db
async def test_create_role_keeps_grant_order(db_session) -> None:
    """Grants come back in the order they were given."""
    repo = RoleRepository(db_session)
    created = await _create(
        repo, _name("Curator"), [Grant("update", "review"), Grant("create", "review")]
    )
    assert created.id
    assert _pairs(created) == [("update", "review"), ("create", "review")]
    assert all(p.role_id == created.id for p in created.permissions)


@pytest.mark.requires_db
async def test_get_by_name_ignores_case(db_session) -> None:
    """get_by_name matches lower(name)."""
    repo = RoleRepository(db_session)
    name = _name("Moderator")
    created = await _create(repo, name, [])
    found = await repo.get_by_name(f"  {name.upper()} ")
    assert found is not None
    assert found.id == created.id
    assert (await repo.get_by_slug(created.slug)).id == created.id
    assert await repo.slug_exists(created.slug)


@pytest.mark.requires_db
async def test_replace_permissions_swaps_overlapping_grants(db_session) -> None:
    """A grant present in both the old and new list does not trip the unique constraint."""
    repo = RoleRepository(db_session)
    created = await _create(
        repo, _name("Editor"), [Grant("create", "review"), Grant("update", "review")]
    )
    replaced = await repo.replace_permissions(
        created.id, [Grant("delete", "review"), Grant("create", "review")]
    )
    assert replaced is not None
    assert _pairs(replaced) == [("delete", "review"), ("create", "review")]
    reloaded = await repo.get_by_id(created.id)
    assert _pairs(reloaded) == [("delete", "review"), ("create", "review")]


@pytest.mark.requires_db
async def test_replace_permissions_unknown_role_returns_none(db_session) -> None:
    repo = RoleRepository(db_session)
    assert await repo.replace_permissions("missing-role-id", [Grant("read", "job")]) is None


@pytest.mark.requires_db
async def test_duplicate_slug_maps_to_conflict(db_session) -> None:
    """A unique violation at flush becomes ConflictException naming the field."""
    repo = RoleRepository(db_session)
    name = _name("Auditor")
    first = await _create(repo, name, [])
    with pytest.raises(ConflictException) as exc_info:
        await repo.create_role(
            name=f"{name} two",
            slug=first.slug,
            description=None,
            status="active",
            grants=[],
        )
    assert exc_info.value.details["field"] == "slug"


@pytest.mark.requires_db
async def test_list_roles_search_and_total(db_session) -> None:
    repo = RoleRepository(db_session)
    token = uuid.uuid4().hex[:10]
    await _create(repo, f"Alpha {token}", [])
    await _create(repo, f"Beta {token}", [])
    page = await repo.list_roles(search=token, limit=1, sort="name", descending=False)
    assert page.total == 2
    assert [r.name for r in page.items] == [f"Alpha {token}"]


@pytest.mark.requires_db
async def test_delete_role(db_session) -> None:
    repo = RoleRepository(db_session)
    created = await _create(repo, _name("Temp"), [Grant("read", "job")])
    assert await repo.delete_role(created.id) is True
    assert await repo.get_by_id(created.id) is None
    assert await repo.delete_role(created.id) is False
