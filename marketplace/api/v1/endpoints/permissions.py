"""Permissions API: list, get, create, update, delete individual grants."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from marketplace.api.v1.dependencies import (
    EventPublisher,
    get_event_publisher,
    get_permission_reader,
    get_permission_service,
    require_access,
)
from marketplace.application.services.permission_service import PermissionService
from marketplace.core.limiter import limit_writes
from marketplace.schemas.common import ApiResponse, PageMeta, ok
from marketplace.schemas.permission import (
    PermissionCreate,
    PermissionListResponse,
    PermissionResponse,
    PermissionUpdate,
)

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[PermissionListResponse],
    dependencies=[Depends(require_access("permission", "read"))],
)
async def list_permissions(
    service: Annotated[PermissionService, Depends(get_permission_reader)],
    search: Annotated[str | None, Query(max_length=64)] = None,
    role_id: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """List permissions; optionally filter by role and search action/resource."""
    result = await service.list_permissions(
        search=search, role_id=role_id, skip=(page - 1) * limit, limit=limit
    )
    return ok(
        PermissionListResponse(
            items=[
                PermissionResponse.model_validate(p, from_attributes=True)
                for p in result.items
            ],
            meta=PageMeta.build(result.total, page, limit),
        ),
        "Permissions retrieved successfully",
    )


@router.get(
    "/{permission_id}",
    response_model=ApiResponse[PermissionResponse],
    dependencies=[Depends(require_access("permission", "read"))],
)
async def get_permission(
    permission_id: str,
    service: Annotated[PermissionService, Depends(get_permission_reader)],
):
    permission = await service.get_permission(permission_id)
    return ok(
        PermissionResponse.model_validate(permission, from_attributes=True),
        "Permission retrieved successfully",
    )


@router.post("", response_model=ApiResponse[PermissionResponse], status_code=201)
@limit_writes
async def create_permission(
    request: Request,
    body: PermissionCreate,
    _: Annotated[object, Depends(require_access("permission", "create"))],
    service: Annotated[PermissionService, Depends(get_permission_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Grant (action, resource) to an existing role."""
    permission = PermissionResponse.model_validate(
        await service.create_permission(body.role_id, body.action, body.resource),
        from_attributes=True,
    )
    await events.commit_and_publish("permissionCreated", permission.model_dump())
    return ok(permission, "Permission created successfully", 201)


@router.put("/{permission_id}", response_model=ApiResponse[PermissionResponse])
@limit_writes
async def update_permission(
    request: Request,
    permission_id: str,
    body: PermissionUpdate,
    _: Annotated[object, Depends(require_access("permission", "update"))],
    service: Annotated[PermissionService, Depends(get_permission_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    permission = PermissionResponse.model_validate(
        await service.update_permission(
            permission_id,
            role_id=body.role_id,
            action=body.action,
            resource=body.resource,
        ),
        from_attributes=True,
    )
    await events.commit_and_publish("permissionUpdated", permission.model_dump())
    return ok(permission, "Permission updated successfully")


@router.delete("/{permission_id}", response_model=ApiResponse[PermissionResponse])
@limit_writes
async def delete_permission(
    request: Request,
    permission_id: str,
    _: Annotated[object, Depends(require_access("permission", "delete"))],
    service: Annotated[PermissionService, Depends(get_permission_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    permission = PermissionResponse.model_validate(
        await service.delete_permission(permission_id), from_attributes=True
    )
    await events.commit_and_publish("permissionDeleted", permission.model_dump())
    return ok(permission, "Permission deleted successfully")
