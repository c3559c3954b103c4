"""Tests for PermissionService: grants always reference an existing role, no duplicates."""

import pytest

from marketplace.application.services.permission_service import PermissionService
from marketplace.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)


@pytest.fixture
def service(permission_repo, role_repo) -> PermissionService:
    return PermissionService(permission_repo, role_repo)


@pytest.fixture
def role_id(store) -> str:
    return store.add_role("editor", [("read", "post")])


async def test_create_permission_appends_normalized_grant(
    service: PermissionService, role_id: str, store
) -> None:
    created = await service.create_permission(role_id, " Update ", "POST")
    assert (created.role_id, created.action, created.resource) == (role_id, "update", "post")
    role = store.role_result(role_id)
    assert [p.action for p in role.permissions] == ["read", "update"]


async def test_create_permission_requires_existing_role(service: PermissionService) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.create_permission("missing", "read", "post")
    assert exc_info.value.details == {"field": "role_id"}


async def test_create_duplicate_permission_conflicts(
    service: PermissionService, role_id: str
) -> None:
    with pytest.raises(ConflictException):
        await service.create_permission(role_id, "READ", "post")


async def test_create_permission_rejects_blank_parts(
    service: PermissionService, role_id: str
) -> None:
    with pytest.raises(ValidationException):
        await service.create_permission(role_id, "read", " ")


async def test_get_and_list_permissions(service: PermissionService, role_id: str, store) -> None:
    other = store.add_role("viewer", [("read", "comment")])
    page = await service.list_permissions(role_id=other)
    assert page.total == 1
    pid = page.items[0].id
    assert (await service.get_permission(pid)).resource == "comment"
    assert (await service.list_permissions(search="post")).total == 1
    with pytest.raises(ResourceNotFoundException):
        await service.get_permission("missing")


async def test_update_permission_partial(service: PermissionService, role_id: str) -> None:
    created = await service.create_permission(role_id, "create", "post")
    updated = await service.update_permission(created.id, action="delete")
    assert (updated.action, updated.resource) == ("delete", "post")


async def test_update_permission_to_duplicate_conflicts(
    service: PermissionService, role_id: str
) -> None:
    created = await service.create_permission(role_id, "create", "post")
    with pytest.raises(ConflictException):
        await service.update_permission(created.id, action="read")


async def test_update_permission_same_values_is_not_a_conflict(
    service: PermissionService, role_id: str
) -> None:
    created = await service.create_permission(role_id, "create", "post")
    assert (await service.update_permission(created.id, action="CREATE")).id == created.id


async def test_update_permission_to_missing_role(
    service: PermissionService, role_id: str
) -> None:
    created = await service.create_permission(role_id, "create", "post")
    with pytest.raises(ValidationException):
        await service.update_permission(created.id, role_id="missing")


async def test_move_permission_to_another_role(
    service: PermissionService, role_id: str, store
) -> None:
    other = store.add_role("viewer")
    created = await service.create_permission(role_id, "create", "post")
    moved = await service.update_permission(created.id, role_id=other)
    assert moved.role_id == other


async def test_delete_permission(service: PermissionService, role_id: str, store) -> None:
    created = await service.create_permission(role_id, "create", "post")
    deleted = await service.delete_permission(created.id)
    assert deleted == created
    assert created.id not in store.permissions
    with pytest.raises(ResourceNotFoundException):
        await service.delete_permission(created.id)
