"""Roles API: list, get, create, update, replace permissions, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from marketplace.api.v1.dependencies import (
    EventPublisher,
    get_event_publisher,
    get_role_reader,
    get_role_service,
    require_access,
)
from marketplace.application.dtos.role import RoleResult
from marketplace.application.services.role_service import RoleService
from marketplace.core.limiter import limit_writes
from marketplace.schemas.common import ApiResponse, PageMeta, ok
from marketplace.schemas.role import (
    RoleCreateRequest,
    RoleListResponse,
    RolePermissionsReplace,
    RoleResponse,
    RoleUpdate,
)

router = APIRouter()


def _to_response(role: RoleResult) -> RoleResponse:
    return RoleResponse.model_validate(role, from_attributes=True)


@router.get(
    "",
    response_model=ApiResponse[RoleListResponse],
    dependencies=[Depends(require_access("role", "read"))],
)
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_reader)],
    search: Annotated[str | None, Query(max_length=120)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    sort: str = "created_at",
    order: str = "desc",
):
    """List roles (public). Search matches name or slug."""
    result = await service.list_roles(
        search=search, skip=(page - 1) * limit, limit=limit, sort=sort, order=order
    )
    return ok(
        RoleListResponse(
            items=[_to_response(r) for r in result.items],
            meta=PageMeta.build(result.total, page, limit),
        ),
        "Roles retrieved successfully",
    )


@router.get(
    "/slug/{slug}",
    response_model=ApiResponse[RoleResponse],
    dependencies=[Depends(require_access("role", "read"))],
)
async def get_role_by_slug(
    slug: str,
    service: Annotated[RoleService, Depends(get_role_reader)],
):
    """Get a role by slug (public)."""
    role = await service.get_role_by_slug(slug)
    return ok(_to_response(role), "Role retrieved successfully")


@router.get(
    "/{role_id}",
    response_model=ApiResponse[RoleResponse],
    dependencies=[Depends(require_access("role", "read"))],
)
async def get_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_reader)],
):
    """Get a role by id (public)."""
    role = await service.get_role(role_id)
    return ok(_to_response(role), "Role retrieved successfully")


@router.post("", response_model=ApiResponse[RoleResponse], status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    _: Annotated[object, Depends(require_access("role", "create"))],
    service: Annotated[RoleService, Depends(get_role_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Create a role; the slug is derived from the name."""
    role = _to_response(
        await service.create_role(
            body.name,
            description=body.description,
            status=body.status,
            permissions=[(p.action, p.resource) for p in body.permissions],
        )
    )
    await events.commit_and_publish("roleCreated", role.model_dump())
    return ok(role, "Role created successfully", 201)


@router.put("/{role_id}", response_model=ApiResponse[RoleResponse])
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdate,
    _: Annotated[object, Depends(require_access("role", "update"))],
    service: Annotated[RoleService, Depends(get_role_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Update a role; a permissions list, when sent, replaces the current one."""
    role = _to_response(
        await service.update_role(
            role_id,
            name=body.name,
            slug=body.slug,
            description=body.description,
            status=body.status,
            permissions=(
                [(p.action, p.resource) for p in body.permissions]
                if body.permissions is not None
                else None
            ),
        )
    )
    await events.commit_and_publish("roleUpdated", role.model_dump())
    return ok(role, "Role updated successfully")


@router.put("/{role_id}/permissions", response_model=ApiResponse[RoleResponse])
@limit_writes
async def replace_role_permissions(
    request: Request,
    role_id: str,
    body: RolePermissionsReplace,
    _: Annotated[object, Depends(require_access("role", "update"))],
    service: Annotated[RoleService, Depends(get_role_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Replace the role's whole permission list in one step."""
    role = _to_response(
        await service.replace_permissions(
            role_id, [(p.action, p.resource) for p in body.permissions]
        )
    )
    await events.commit_and_publish("roleUpdated", role.model_dump())
    return ok(role, "Role permissions replaced successfully")


@router.delete("/{role_id}", response_model=ApiResponse[RoleResponse])
@limit_writes
async def delete_role(
    request: Request,
    role_id: str,
    _: Annotated[object, Depends(require_access("role", "delete"))],
    service: Annotated[RoleService, Depends(get_role_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Delete a role that no identity references."""
    role = _to_response(await service.delete_role(role_id))
    await events.commit_and_publish("roleDeleted", {"id": role.id, "slug": role.slug})
    return ok(role, "Role deleted successfully")
