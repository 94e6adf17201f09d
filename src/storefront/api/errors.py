"""HTTP error mapping for the storefront API.

Protean's handlers cover ValidationError (400) and ObjectNotFoundError (404);
checkout's configuration and provider failures are added here.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import ConfigurationMissing, ExternalProviderFailure

logger = structlog.get_logger(__name__)


async def _configuration_missing(request: Request, exc: ConfigurationMissing):
    logger.error("Request failed on missing configuration", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=503,
        content={"detail": "Checkout is temporarily unavailable. Please try again later."},
    )


async def _provider_failure(request: Request, exc: ExternalProviderFailure):
    return JSONResponse(
        status_code=502,
        content={"detail": "The payment provider could not be reached. Please try again."},
    )


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ConfigurationMissing, _configuration_missing)
    app.add_exception_handler(ExternalProviderFailure, _provider_failure)
