"""Access logging for the HTTP app."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = {"/api/health"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status, redirect target and latency."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortlink.web")

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        path = request.url.path
        client = request.client.host if request.client else "-"
        line = f"{client} {request.method} {path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        location = response.headers.get("location")
        if location:
            line += f" location={location}"

        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        self.logger.log(level, line)
        return response
