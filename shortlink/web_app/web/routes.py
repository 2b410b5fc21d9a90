"""Catch-all route feeding the request router."""

from fastapi import APIRouter, Request
from fastapi.responses import Response

router = APIRouter()

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def dispatch(request: Request, path: str):
    """Hand (method, path, body) to the RequestRouter and render its response."""
    request_router = request.app.state.request_router

    body = await request.body()
    result = await request_router.dispatch(request.method, "/" + path, body)

    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )
