from __future__ import annotations

from fastapi import APIRouter, Depends

from personal_manager.core.deps import get_settings
from personal_manager.core.settings import AppSettings
from personal_manager.entities import utcnow
from personal_manager.schemas.common import ApiResponse, HealthStatus

router = APIRouter(tags=["Health"])


# PUBLIC_INTERFACE
@router.get(
    "/health",
    response_model=ApiResponse[HealthStatus],
    summary="Health Check",
)
def health_check(settings: AppSettings = Depends(get_settings)) -> ApiResponse[HealthStatus]:
    """
    Basic liveness health check endpoint.

    Returns:
        Envelope with status 'ok' and the configured storage backend.
    """
    return ApiResponse.ok(
        HealthStatus(status="ok", storage_backend=settings.STORAGE_BACKEND, timestamp=utcnow()),
        message="Healthy",
    )
