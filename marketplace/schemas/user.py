"""User API schemas (identity view and admin state transitions)."""

from pydantic import BaseModel, ConfigDict, Field

from marketplace.schemas.role import RoleResponse


class IdentityResponse(BaseModel):
    """Identity with its role; never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    username: str
    email: str
    role_id: str
    status: str
    is_verified: bool
    freelancer_status: str | None
    role: RoleResponse | None


class UserStatusUpdate(BaseModel):
    """Request body for PATCH /users/{id}/status."""

    status: str = Field(..., description="active, inactive or suspended")


class FreelancerStatusUpdate(BaseModel):
    """Request body for PATCH /users/{id}/freelancer-status."""

    status: str = Field(..., description="approved or rejected")
    admin_comment: str | None = Field(default=None, max_length=1000)
