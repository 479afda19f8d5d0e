"""Pydantic schemas for service status endpoints."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="OK", description="Always OK while the process serves requests")
    timestamp: str = Field(..., description="ISO-8601 UTC time of the check")
    environment: str
    uptime: float = Field(..., description="Seconds since the app started")


class WelcomeResponse(BaseModel):
    """Response for the root endpoint."""

    message: str
    version: str
    environment: str


class StatusResponse(BaseModel):
    """Runtime status of the service."""

    status: str = "running"
    environment: str
    port: str


class RouteNotFoundResponse(BaseModel):
    """Body returned for any unmatched route."""

    error: str = "Route not found"
    path: str
    method: str


class ServerErrorResponse(BaseModel):
    """Body returned when a handler fails."""

    error: str = "Internal server error"
    message: str
    timestamp: str
