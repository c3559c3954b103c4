"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from marketplace.schemas.common import PageMeta


class GrantIn(BaseModel):
    """One (action, resource) pair in a request body."""

    action: str = Field(..., min_length=1, max_length=64, examples=["create"])
    resource: str = Field(..., min_length=1, max_length=64, examples=["service"])


class PermissionCreate(GrantIn):
    """Request body for creating a permission on an existing role."""

    role_id: str = Field(..., min_length=1)


class PermissionUpdate(BaseModel):
    """Request body for updating a permission (partial)."""

    role_id: str | None = Field(default=None, min_length=1)
    action: str | None = Field(default=None, min_length=1, max_length=64)
    resource: str | None = Field(default=None, min_length=1, max_length=64)


class PermissionResponse(BaseModel):
    """Permission list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    role_id: str
    action: str
    resource: str


class PermissionListResponse(BaseModel):
    """One page of permissions."""

    items: list[PermissionResponse]
    meta: PageMeta
