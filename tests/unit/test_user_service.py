"""Tests for UserAdministrationService (status, freelancer approval, deletion)."""

import pytest

from marketplace.application.services.user_service import UserAdministrationService
from marketplace.domain.exceptions import ResourceNotFoundException, ValidationException


@pytest.fixture
def service(user_repo) -> UserAdministrationService:
    return UserAdministrationService(user_repo)


async def test_update_status(service: UserAdministrationService, seeded) -> None:
    updated = await service.update_status(seeded["client"], "suspended")
    assert updated.status == "suspended"


async def test_update_status_rejects_unknown_value(
    service: UserAdministrationService, seeded
) -> None:
    with pytest.raises(ValidationException):
        await service.update_status(seeded["client"], "banned")


async def test_update_status_unknown_user(service: UserAdministrationService) -> None:
    with pytest.raises(ResourceNotFoundException):
        await service.update_status("ghost", "active")


async def test_approve_freelancer(service: UserAdministrationService, seeded, store) -> None:
    updated = await service.set_freelancer_status(
        seeded["freelancer"], "approved", admin_id=seeded["admin"], admin_comment="  ok  "
    )
    assert updated.freelancer_status == "approved"
    row = store.users[seeded["freelancer"]]
    assert row["approved_by"] == seeded["admin"]
    assert row["admin_comment"] == "ok"


async def test_freelancer_decision_must_be_final_state(
    service: UserAdministrationService, seeded
) -> None:
    with pytest.raises(ValidationException):
        await service.set_freelancer_status(
            seeded["freelancer"], "pending", admin_id=seeded["admin"]
        )


async def test_only_freelancers_can_be_approved(
    service: UserAdministrationService, seeded
) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.set_freelancer_status(
            seeded["client"], "approved", admin_id=seeded["admin"]
        )
    assert exc_info.value.message == "User is not a freelancer"


async def test_delete_user(service: UserAdministrationService, seeded, store) -> None:
    deleted = await service.delete_user(seeded["client"])
    assert deleted.username == "client"
    assert seeded["client"] not in store.users
    with pytest.raises(ResourceNotFoundException):
        await service.delete_user(seeded["client"])
