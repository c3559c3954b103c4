"""Auth API: sign up, sign in, and the current identity.

Sign-up and sign-in are public and rate limited; /me needs a bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from marketplace.api.v1.dependencies import (
    EventPublisher,
    get_auth_service,
    get_current_identity,
    get_event_publisher,
)
from marketplace.application.dtos.user import AuthResult, IdentityResult
from marketplace.application.services.auth_service import AuthService
from marketplace.core.limiter import limit_auth
from marketplace.schemas.auth import AuthResponse, SignInRequest, SignUpRequest
from marketplace.schemas.common import ApiResponse, ok
from marketplace.schemas.user import IdentityResponse

router = APIRouter()


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=IdentityResponse.model_validate(result.identity, from_attributes=True),
        access_token=result.access_token,
    )


@router.post("/signup", response_model=ApiResponse[AuthResponse], status_code=201)
@limit_auth
async def signup(
    request: Request,
    body: SignUpRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Register as freelancer or client; admin cannot be self-assigned."""
    response = _auth_response(
        await service.sign_up(
            name=body.name,
            username=body.username,
            email=str(body.email),
            password=body.password,
            role=body.role,
        )
    )
    await events.commit_and_publish("userCreated", response.user.model_dump())
    return ok(response, "User registered successfully", 201)


@router.post("/signin", response_model=ApiResponse[AuthResponse])
@limit_auth
async def signin(
    request: Request,
    body: SignInRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Exchange username-or-email and password for a bearer token."""
    result = await service.sign_in(body.username_email, body.password)
    return ok(_auth_response(result), "Signed in successfully")


@router.get("/me", response_model=ApiResponse[IdentityResponse])
async def me(identity: Annotated[IdentityResult, Depends(get_current_identity)]):
    return ok(
        IdentityResponse.model_validate(identity, from_attributes=True),
        "User retrieved successfully",
    )
