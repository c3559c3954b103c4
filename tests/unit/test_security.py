"""Tests for JWT issue/verify and password hashing."""

from datetime import timedelta

import pytest
from jose import jwt

from marketplace.application.interfaces.services import TokenExpiredError
from marketplace.core.config import get_settings
from marketplace.infrastructure.security.jwt import (
    JWTTokenService,
    create_access_token,
    verify_token,
)
from marketplace.infrastructure.security.password import (
    get_dummy_hash,
    get_password_hash,
    verify_password,
)


def test_token_round_trip_carries_identity_and_times() -> None:
    service = JWTTokenService()
    payload = service.verify_token(service.create_access_token("user-1"))
    assert payload["sub"] == "user-1"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_distinguished() -> None:
    token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-10))
    with pytest.raises(TokenExpiredError):
        verify_token(token)


def test_expired_error_is_a_value_error() -> None:
    assert issubclass(TokenExpiredError, ValueError)


def test_tampered_token_is_invalid() -> None:
    token = create_access_token({"sub": "user-1"})
    head, body, signature = token.split(".")
    with pytest.raises(ValueError) as exc_info:
        verify_token(f"{head}.{body}.{signature[::-1]}")
    assert not isinstance(exc_info.value, TokenExpiredError)


def test_token_signed_with_other_secret_is_invalid() -> None:
    token = jwt.encode(
        {"sub": "user-1", "iat": 1, "exp": 4102444800},
        "another-secret",
        algorithm=get_settings().algorithm,
    )
    with pytest.raises(ValueError):
        verify_token(token)


def test_token_without_subject_is_invalid() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"iat": 1, "exp": 4102444800},
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    with pytest.raises(ValueError):
        verify_token(token)


def test_malformed_token_is_invalid() -> None:
    with pytest.raises(ValueError):
        verify_token("not-a-jwt")


def test_password_hash_and_verify() -> None:
    hashed = get_password_hash("s3cret-password")
    assert hashed != "s3cret-password"
    assert verify_password("s3cret-password", hashed)
    assert not verify_password("wrong", hashed)


def test_long_passwords_are_not_truncated() -> None:
    base = "x" * 80
    hashed = get_password_hash(base + "a")
    assert not verify_password(base + "b", hashed)


def test_verify_against_garbage_hash_is_false() -> None:
    assert not verify_password("anything", "not-a-bcrypt-hash")


async def test_dummy_hash_is_cached_and_valid() -> None:
    first = await get_dummy_hash()
    assert first == await get_dummy_hash()
    assert not verify_password("guess", first)
