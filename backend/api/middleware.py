"""Request logging middleware."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response

from common.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


def register_request_logging(app: FastAPI) -> None:
    """Log every request (timestamp, method, path) before it is handled."""

    @app.middleware("http")
    async def log_request(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info(f"{utc_now_iso()} - {request.method} {request.url.path}")
        return await call_next(request)
