"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the error envelope {success, statusCode, message, error}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace.core.config import get_settings
from marketplace.domain.exceptions import MarketplaceException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "INTERNAL_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def error_envelope(
    status_code: int,
    message: str,
    code: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the error response shared by every failure path."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "statusCode": status_code,
            "message": message,
            "error": {"code": code, "details": jsonable_encoder(details or {})},
        },
        headers=headers,
    )


def _marketplace_exception_handler(
    request: Request, exc: MarketplaceException
) -> JSONResponse:
    """Render a domain exception with the status its error_code maps to."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status == 500:
        logger.exception(
            "%s on %s %s: %s %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
            exc_info=exc,
        )
        if not get_settings().debug:
            return error_envelope(500, "Internal server error", exc.error_code)
    elif status > 500:
        logger.warning(
            "%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message
        )
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return error_envelope(status, exc.message, exc.error_code, exc.details, headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return error_envelope(
        422, "Request validation failed", "VALIDATION_ERROR", {"errors": exc.errors()}
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the envelope for Starlette HTTP exceptions (status + detail)."""
    return error_envelope(
        exc.status_code, str(exc.detail), "HTTP_ERROR", headers=exc.headers
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 when a slowapi limit is exceeded."""
    return error_envelope(
        429, "Too many requests, please try again later", "RATE_LIMITED",
        {"limit": str(exc.detail)},
    )


def _database_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 503 when the database cannot be reached (transient)."""
    logger.warning("Database unavailable on %s: %s", request.url.path, exc)
    return error_envelope(
        503, "Service temporarily unavailable", "SERVICE_UNAVAILABLE"
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    message = str(exc) if settings.debug else "Internal server error"
    return error_envelope(500, message, "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: MarketplaceException (and
    subclasses), RequestValidationError, StarletteHTTPException,
    RateLimitExceeded, SQLAlchemy connectivity errors, generic Exception.
    """
    app.add_exception_handler(MarketplaceException, _marketplace_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(OperationalError, _database_unavailable_handler)
    app.add_exception_handler(InterfaceError, _database_unavailable_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
