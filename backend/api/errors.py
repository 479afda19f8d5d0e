"""Exception handlers for unmatched routes and failing handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas.status import RouteNotFoundResponse, ServerErrorResponse
from common.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"

# An unsupported method on a known path is still "no route" for clients
_ROUTE_NOT_FOUND_STATUSES = {404, 405}


def _original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Turn routing misses into the JSON 404 body."""
    if exc.status_code in _ROUTE_NOT_FOUND_STATUSES:
        body = RouteNotFoundResponse(path=_original_url(request), method=request.method)
        return JSONResponse(status_code=404, content=body.model_dump())

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure in full, return a redacted 500 outside development."""
    logger.error(f"Error: {exc!r} on {request.method} {request.url.path}", exc_info=exc)

    settings = request.app.state.settings
    message = str(exc) if settings.is_development else GENERIC_ERROR_MESSAGE
    body = ServerErrorResponse(message=message, timestamp=utc_now_iso())
    return JSONResponse(status_code=500, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
