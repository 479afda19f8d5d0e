"""Health check endpoint."""

from fastapi import APIRouter, Depends

from api.dependencies import get_app_settings, get_uptime
from api.schemas.status import HealthResponse
from common.config import Settings
from common.timestamps import utc_now_iso

router = APIRouter()


@router.api_route("/health", methods=["GET", "HEAD"], response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    uptime: float = Depends(get_uptime),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns the service status, current time, environment and uptime.
    Probed by the load balancer target group and the container health check.
    """
    return HealthResponse(
        status="OK",
        timestamp=utc_now_iso(),
        environment=settings.environment,
        uptime=uptime,
    )
