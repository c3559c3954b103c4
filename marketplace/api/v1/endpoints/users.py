"""Users API: admin state transitions (account status, freelancer approval) and deletion."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from marketplace.api.v1.dependencies import (
    EventPublisher,
    get_event_publisher,
    get_user_admin_service,
    require_access,
)
from marketplace.application.dtos.user import IdentityResult
from marketplace.application.services.user_service import UserAdministrationService
from marketplace.core.limiter import limit_writes
from marketplace.schemas.common import ApiResponse, ok
from marketplace.schemas.user import (
    FreelancerStatusUpdate,
    IdentityResponse,
    UserStatusUpdate,
)

router = APIRouter()


def _to_response(identity: IdentityResult) -> IdentityResponse:
    return IdentityResponse.model_validate(identity, from_attributes=True)


@router.patch("/{user_id}/status", response_model=ApiResponse[IdentityResponse])
@limit_writes
async def update_user_status(
    request: Request,
    user_id: str,
    body: UserStatusUpdate,
    _: Annotated[IdentityResult, Depends(require_access("user", "approve"))],
    service: Annotated[UserAdministrationService, Depends(get_user_admin_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Set account status to active, inactive or suspended (admin only)."""
    user = _to_response(await service.update_status(user_id, body.status))
    await events.commit_and_publish(
        "userStatusUpdated",
        {"id": user.id, "status": user.status},
        audiences=("admin", user.id),
    )
    return ok(user, "User status updated successfully")


@router.patch(
    "/{user_id}/freelancer-status", response_model=ApiResponse[IdentityResponse]
)
@limit_writes
async def update_freelancer_status(
    request: Request,
    user_id: str,
    body: FreelancerStatusUpdate,
    admin: Annotated[IdentityResult, Depends(require_access("user", "approve"))],
    service: Annotated[UserAdministrationService, Depends(get_user_admin_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    """Approve or reject a freelancer, with an optional comment (admin only)."""
    user = _to_response(
        await service.set_freelancer_status(
            user_id,
            body.status,
            admin_id=admin.id,
            admin_comment=body.admin_comment,
        )
    )
    await events.commit_and_publish(
        "freelancerStatusUpdated",
        {
            "id": user.id,
            "freelancer_status": user.freelancer_status,
            "admin_comment": body.admin_comment,
        },
        audiences=("admin", user.id),
    )
    return ok(user, "Freelancer status updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[IdentityResponse])
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    _: Annotated[IdentityResult, Depends(require_access("user", "delete"))],
    service: Annotated[UserAdministrationService, Depends(get_user_admin_service)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
):
    user = _to_response(await service.delete_user(user_id))
    await events.commit_and_publish("userDeleted", {"id": user.id})
    return ok(user, "User deleted successfully")
