"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..lib.errors import ShortLinkError
from ..lib.router import RequestRouter
from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: LinkService instance (may be None until lifespan startup)
        config: Configuration instance
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    logger = logger or logging.getLogger("shortlink")

    app = FastAPI(
        title="Short Link Service",
        description="Maps long URLs to short codes and redirects back",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.config = config
    app.state.logger = logger
    attach_service(app, service_instance)

    # CORS headers and OPTIONS replies come from RequestRouter
    app.add_middleware(LoggingMiddleware, logger=logger.getChild("web"))

    @app.exception_handler(ShortLinkError)
    async def short_link_error_handler(request: Request, exc: ShortLinkError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # The catch-all web router must come last
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Links"])

    return app


def attach_service(app: FastAPI, service_instance) -> None:
    """Store the service and a RequestRouter over it in app state."""
    config = app.state.config
    app.state.service = service_instance
    app.state.request_router = None
    if service_instance is not None:
        app.state.request_router = RequestRouter(
            service_instance,
            cors_allow_origin=config.cors_allow_origin,
            logger=app.state.logger.getChild("router"),
        )
