"""Health check endpoint. No dependencies; used for liveness checks."""

from fastapi import APIRouter

from marketplace.core.config import get_settings
from marketplace.schemas.common import ApiResponse, ok
from marketplace.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[HealthResponse])
def health_check():
    """Return ok status and the running version."""
    return ok(HealthResponse(version=get_settings().app_version), "Service is healthy")
