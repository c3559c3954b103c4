"""Tests for AuthService sign-up and sign-in."""

import pytest
from fakes import FakeTokenService

from marketplace.application.services.auth_service import AuthService
from marketplace.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)


@pytest.fixture
def service(user_repo, role_repo) -> AuthService:
    return AuthService(user_repo, role_repo, FakeTokenService())


def _signup(**overrides):
    data = {
        "name": "Ada",
        "username": "Ada",
        "email": "Ada@Example.com",
        "password": "correct-horse",
        "role": "freelancer",
    }
    data.update(overrides)
    return data


async def test_sign_up_freelancer_is_pending(service: AuthService, seeded) -> None:
    result = await service.sign_up(**_signup())
    assert result.identity.username == "ada"
    assert result.identity.email == "ada@example.com"
    assert result.identity.role.slug == "freelancer"
    assert result.identity.freelancer_status == "pending"
    assert result.access_token == f"token-{result.identity.id}"


async def test_sign_up_client_has_no_freelancer_status(service: AuthService, seeded) -> None:
    result = await service.sign_up(**_signup(role="Client"))
    assert result.identity.role.slug == "client"
    assert result.identity.freelancer_status is None


async def test_admin_cannot_be_self_assigned(service: AuthService, seeded) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.sign_up(**_signup(role="admin"))
    assert exc_info.value.details == {"field": "role"}


async def test_short_password(service: AuthService, seeded) -> None:
    with pytest.raises(ValidationException):
        await service.sign_up(**_signup(password="short"))


async def test_unseeded_role(service: AuthService) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.sign_up(**_signup())
    assert exc_info.value.message == "User role not found."


@pytest.mark.parametrize(
    ("overrides", "field"),
    [({"username": "CLIENT"}, "username"), ({"email": "client@example.com"}, "email")],
)
async def test_duplicate_username_or_email(
    service: AuthService, seeded, overrides, field
) -> None:
    with pytest.raises(ConflictException) as exc_info:
        await service.sign_up(**_signup(**overrides))
    assert exc_info.value.details == {"field": field}


async def test_sign_in_by_username_or_email(service: AuthService, seeded) -> None:
    by_name = await service.sign_in("client", "password123")
    by_email = await service.sign_in("CLIENT@example.com", "password123")
    assert by_name.identity.id == by_email.identity.id == seeded["client"]


async def test_sign_in_failure_is_generic(service: AuthService, seeded) -> None:
    for login, password in (("client", "wrong"), ("nobody", "password123")):
        with pytest.raises(AuthenticationException) as exc_info:
            await service.sign_in(login, password)
        assert exc_info.value.message == "Invalid username/email or password"
