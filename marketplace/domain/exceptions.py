"""Domain exceptions for the marketplace application.

Defines domain-level exceptions that represent authentication, authorization
and business rule failures. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses in
exception handlers (see marketplace.core.exception_handlers).
"""

from typing import Any


class MarketplaceException(Exception):
    """Base exception for all marketplace application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``error`` member of the response envelope."""
        return {"code": self.error_code, "details": self.details}


class ValidationException(MarketplaceException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(MarketplaceException):
    """Raised when no usable credential is presented (Unauthenticated).

    ``reason`` separates a missing credential, an expired token (client should
    prompt re-login) and an invalid token (reject outright). ``credentials`` is
    used by sign-in when login/password do not match.
    """

    MISSING = "missing"
    EXPIRED = "expired"
    INVALID = "invalid"
    CREDENTIALS = "credentials"

    _MESSAGES = {
        MISSING: "Unauthorized, no token provided",
        EXPIRED: "Unauthorized, token expired",
        INVALID: "Unauthorized, invalid token",
        CREDENTIALS: "Invalid username/email or password",
    }

    def __init__(self, reason: str = INVALID, message: str | None = None) -> None:
        """Initialize with a reason and optional message override.

        Args:
            reason: One of missing, expired, invalid, credentials.
            message: Optional message; defaults to the reason's standard text.
        """
        self.reason = reason
        super().__init__(
            message or self._MESSAGES.get(reason, "Authentication failed"),
            "AUTHENTICATION_ERROR",
            {"reason": reason},
        )

    @classmethod
    def missing(cls) -> "AuthenticationException":
        return cls(cls.MISSING)

    @classmethod
    def expired(cls) -> "AuthenticationException":
        return cls(cls.EXPIRED)

    @classmethod
    def invalid(cls) -> "AuthenticationException":
        return cls(cls.INVALID)


class AuthorizationException(MarketplaceException):
    """Raised when a resolved identity lacks the required capability (Forbidden).

    The message names the unmet requirement kind only; it never reveals whether
    another identity's resource exists.
    """

    def __init__(
        self,
        requirement: str | None = None,
        message: str = "Access denied",
    ) -> None:
        """Initialize with the unmet requirement kind.

        Args:
            requirement: Requirement kind that failed (e.g. 'RoleSlug', 'Permission').
            message: Human-readable message; default used when requirement omitted.
        """
        details: dict[str, Any] = {}
        if requirement:
            message = f"Access denied: {requirement} requirement not met"
            details["requirement"] = requirement
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(MarketplaceException):
    """Raised when a requested or referenced resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'identity').
            resource_id: The ID that was not found, when known.
            message: Optional message override.
        """
        self.resource_type = resource_type
        super().__init__(
            message or f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class RoleNotFoundException(ResourceNotFoundException):
    """Raised when an identity's role reference cannot be resolved.

    Signals referential-integrity damage rather than an ordinary denial, so it
    is surfaced as 404 and logged distinctly.
    """

    def __init__(self, role_id: str | None = None) -> None:
        super().__init__("role", role_id, "Role not found")


class ConflictException(MarketplaceException):
    """Raised on a uniqueness violation (role name/slug, username, duplicate grant)."""

    def __init__(self, message: str, field: str | None = None, **details_extra: Any) -> None:
        """Initialize with message and conflicting field.

        Args:
            message: Human-readable description.
            field: Optional field that collided (e.g. 'name', 'slug').
            **details_extra: Optional keys merged into details.
        """
        details: dict[str, Any] = {**details_extra}
        if field:
            details["field"] = field
        super().__init__(message, "CONFLICT", details)


class InternalException(MarketplaceException):
    """Raised on an invariant violation (e.g. slug generation exhausted its bound).

    Rendered as 500 without internal detail; the context goes to the log only.
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, "INTERNAL_ERROR", context)


class ServiceUnavailableException(MarketplaceException):
    """Raised when a storage lookup does not complete in time (transient)."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message, "SERVICE_UNAVAILABLE")
