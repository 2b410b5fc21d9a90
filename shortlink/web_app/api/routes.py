"""API routes implementation."""

from fastapi import APIRouter, Request
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL.

    Service errors propagate to the app-level ShortLinkError handler.
    """
    service = request.app.state.service

    if body.code is not None:
        short_url = await service.create_custom_short_link(body.url, body.code)
    else:
        short_url = await service.create_short_link(body.url)

    return ShortenResponse(short_url=short_url)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its backends are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
