"""Root and status endpoints."""

from fastapi import APIRouter, Depends

from api.dependencies import get_app_settings
from api.schemas.status import StatusResponse, WelcomeResponse
from common.config import Settings

router = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"], response_model=WelcomeResponse)
async def root(settings: Settings = Depends(get_app_settings)) -> WelcomeResponse:
    return WelcomeResponse(
        message=f"Welcome to {settings.app_name}",
        version=settings.version,
        environment=settings.environment,
    )


@router.api_route("/api/status", methods=["GET", "HEAD"], response_model=StatusResponse)
async def status(settings: Settings = Depends(get_app_settings)) -> StatusResponse:
    """Report that the service is running and which port it listens on."""
    return StatusResponse(
        status="running",
        environment=settings.environment,
        port=str(settings.port),
    )
