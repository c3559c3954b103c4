"""Role API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from marketplace.schemas.common import PageMeta
from marketplace.schemas.permission import GrantIn, PermissionResponse


class RoleCreateRequest(BaseModel):
    """Request body for creating a role. The slug is derived from the name."""

    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=500)
    status: str = Field(default="active", description="active or inactive")
    permissions: list[GrantIn] = Field(default_factory=list, max_length=200)


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial).

    When ``permissions`` is present the whole list is replaced.
    """

    name: str | None = Field(default=None, min_length=1, max_length=120)
    slug: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=500)
    status: str | None = None
    permissions: list[GrantIn] | None = Field(default=None, max_length=200)


class RolePermissionsReplace(BaseModel):
    """Request body for PUT /roles/{id}/permissions (atomic replacement)."""

    permissions: list[GrantIn] = Field(..., max_length=200)


class RoleResponse(BaseModel):
    """Role list/detail response with its ordered permissions."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    status: str
    description: str | None
    permissions: list[PermissionResponse]


class RoleListResponse(BaseModel):
    """One page of roles."""

    items: list[RoleResponse]
    meta: PageMeta
