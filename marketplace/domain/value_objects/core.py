"""Domain value objects for the marketplace application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import ClassVar

# Shared slug pattern: lowercase alphanumeric with optional hyphens (e.g. super-admin).
_SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Derive a URL-safe slug: ASCII-folded, lowercase, hyphen separated.

    Returns an empty string when nothing slug-worthy remains (e.g. '!!!').
    """
    folded = (
        unicodedata.normalize("NFKD", value)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    return _NON_SLUG_CHARS.sub("-", folded).strip("-")


@dataclass(frozen=True)
class Slug:
    """Value object for role slugs (SRP: slug validation).

    Slugs are lowercase alphanumeric with optional single hyphens between
    groups, at most 120 characters (e.g. 'admin', 'senior-freelancer-2').
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 120

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Slug must be a non-empty string")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(f"Slug must be at most {self.MAX_LENGTH} characters")
        if not _SLUG_RE.match(self.value):
            raise ValueError(
                "Slug must be lowercase alphanumeric with optional hyphens "
                "(e.g., 'admin', 'senior-freelancer')"
            )

    @classmethod
    def from_name(cls, name: str) -> "Slug":
        """Build a slug from a display name. Raises ValueError if nothing remains."""
        return cls(slugify(name)[: cls.MAX_LENGTH].rstrip("-"))

    def with_suffix(self, n: int) -> "Slug":
        """Return '<slug>-<n>' (used when the base slug is already taken).

        The base is shortened when needed so the result stays within MAX_LENGTH.
        """
        suffix = f"-{n}"
        head = self.value[: self.MAX_LENGTH - len(suffix)].rstrip("-")
        return Slug(f"{head}{suffix}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Grant:
    """Value object for one (action, resource) permission grant.

    Both parts are open strings; they are trimmed and lowercased so
    'Create'/'create ' and 'create' denote the same grant.
    """

    action: str
    resource: str

    MAX_PART_LENGTH: ClassVar[int] = 64

    def __post_init__(self) -> None:
        for field_name in ("action", "resource"):
            raw = getattr(self, field_name)
            if not isinstance(raw, str):
                raise ValueError(f"Permission {field_name} must be a string")
            normalized = raw.strip().lower()
            if not normalized:
                raise ValueError(f"Permission {field_name} must be a non-empty string")
            if len(normalized) > self.MAX_PART_LENGTH:
                raise ValueError(
                    f"Permission {field_name} must be at most {self.MAX_PART_LENGTH} characters"
                )
            object.__setattr__(self, field_name, normalized)

    def matches(self, action: str, resource: str) -> bool:
        """Exact match against an (action, resource) pair after normalization."""
        return self.action == action.strip().lower() and self.resource == resource.strip().lower()

    def __str__(self) -> str:
        return f"{self.resource}:{self.action}"
