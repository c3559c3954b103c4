"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators of the application services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class TokenExpiredError(ValueError):
    """Token signature is valid but the token is past its ``exp``."""


# Token service interface
class ITokenService(Protocol):
    """Protocol for issuing and verifying signed bearer credentials."""

    def create_access_token(self, identity_id: str) -> str:
        """Return a signed token carrying identity id, issue time and expiry."""

    def verify_token(self, token: str) -> dict[str, Any]:
        """Return the verified payload.

        Raises TokenExpiredError for an expired token and ValueError for any
        other invalid token (see marketplace.infrastructure.security.jwt).
        """


# Event sink interface (real-time side-channel)
class IEventSink(Protocol):
    """Protocol for the notification side-channel handlers publish to.

    The authorization core never calls this; only request handlers do, after
    their state change is durable.
    """

    async def publish(
        self,
        event: str,
        payload: dict[str, Any],
        *,
        audience: str = "admin",
    ) -> None:
        """Deliver ``event`` to ``audience`` ('admin' or an identity id)."""
