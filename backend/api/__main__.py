"""Run the API server.

Usage:
    python -m api

Reads PORT, HOST, ENVIRONMENT (or NODE_ENV) and LOG_LEVEL from the
environment.
"""

import logging

import uvicorn

from api.main import create_app
from common.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s: %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
