"""FastAPI dependencies shared by the routers."""

import time

from fastapi import Request

from common.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_uptime(request: Request) -> float:
    """Seconds elapsed since the app was created."""
    return time.monotonic() - request.app.state.started_at
