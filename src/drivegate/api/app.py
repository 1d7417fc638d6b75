"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..manager import GatewayManager
from ..settings import Settings, get_settings
from .routes import error_response, router

logger = logging.getLogger(__name__)


async def invalid_request_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    return error_response(400, "Invalid request body")


def create_app(
    settings: Settings | None = None,
    manager: GatewayManager | None = None,
) -> FastAPI:
    """Build the gateway app; credentials are not read until the first request."""
    settings = settings or get_settings()

    app = FastAPI(title="drivegate", version=__version__)
    app.state.settings = settings
    app.state.manager = manager or GatewayManager.from_settings(settings)

    app.include_router(router)
    app.add_exception_handler(RequestValidationError, invalid_request_handler)
    return app
