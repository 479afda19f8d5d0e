"""API schemas package."""

from api.schemas.status import (
    HealthResponse,
    RouteNotFoundResponse,
    ServerErrorResponse,
    StatusResponse,
    WelcomeResponse,
)

__all__ = [
    "HealthResponse",
    "RouteNotFoundResponse",
    "ServerErrorResponse",
    "StatusResponse",
    "WelcomeResponse",
]
