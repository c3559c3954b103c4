"""Tests for domain value objects (Slug, Grant) and slugify."""

import pytest

from marketplace.domain.value_objects.core import Grant, Slug, slugify


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Admin", "admin"),
        ("Senior Freelancer", "senior-freelancer"),
        ("  Café  Owner!! ", "cafe-owner"),
        ("a--b__c", "a-b-c"),
        ("!!!", ""),
    ],
)
def test_slugify(name: str, expected: str) -> None:
    assert slugify(name) == expected


def test_slug_from_name() -> None:
    assert Slug.from_name("Project Manager").value == "project-manager"


def test_slug_from_name_without_slug_characters_raises() -> None:
    with pytest.raises(ValueError):
        Slug.from_name("***")


@pytest.mark.parametrize("bad", ["", "Admin", "has space", "-lead", "trail-", "a--b"])
def test_slug_rejects_invalid_values(bad: str) -> None:
    with pytest.raises(ValueError):
        Slug(bad)


def test_slug_rejects_too_long() -> None:
    with pytest.raises(ValueError):
        Slug("a" * (Slug.MAX_LENGTH + 1))


def test_slug_with_suffix() -> None:
    assert Slug("admin").with_suffix(2).value == "admin-2"


def test_slug_with_suffix_stays_within_max_length() -> None:
    long = Slug("a" * Slug.MAX_LENGTH)
    suffixed = long.with_suffix(123)
    assert len(suffixed.value) == Slug.MAX_LENGTH
    assert suffixed.value.endswith("-123")


def test_grant_normalizes_parts() -> None:
    grant = Grant("  Create ", "SERVICE")
    assert (grant.action, grant.resource) == ("create", "service")
    assert grant == Grant("create", "service")
    assert str(grant) == "service:create"


def test_grant_matches_is_exact_after_normalization() -> None:
    grant = Grant("update", "role")
    assert grant.matches("UPDATE", " role")
    assert not grant.matches("update", "roles")
    assert not grant.matches("*", "role")


@pytest.mark.parametrize(
    ("action", "resource"),
    [("", "role"), ("   ", "role"), ("create", ""), ("x" * 65, "role")],
)
def test_grant_rejects_invalid_parts(action: str, resource: str) -> None:
    with pytest.raises(ValueError):
        Grant(action, resource)
