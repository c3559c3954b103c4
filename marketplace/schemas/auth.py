"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from marketplace.schemas.user import IdentityResponse


class SignUpRequest(BaseModel):
    """Request body for public registration as freelancer or client."""

    name: str = Field(..., min_length=1, max_length=120)
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: str = Field(..., description="freelancer or client")


class SignInRequest(BaseModel):
    """Request body for sign-in with username or email."""

    username_email: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Identity plus bearer token."""

    user: IdentityResponse
    access_token: str
    token_type: str = "bearer"
