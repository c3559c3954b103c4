"""DTOs for identity use cases (no dependency on ORM)."""

from dataclasses import dataclass

from marketplace.application.dtos.role import RoleResult


@dataclass(frozen=True)
class IdentityResult:
    """Authorization-relevant read-model of a user. No password.

    ``role`` is loaded together with the user; it is None only when the
    stored role reference dangles, which the resolver and the gate treat as
    NotFound(role).
    """

    id: str
    name: str
    username: str
    email: str
    role_id: str
    status: str
    is_verified: bool
    freelancer_status: str | None
    role: RoleResult | None


@dataclass(frozen=True)
class AuthResult:
    """Identity plus freshly issued access token (sign-up / sign-in)."""

    identity: IdentityResult
    access_token: str
