"""AWS API Gateway proxy adapter.

Accepts REST API (v1) and HTTP API (v2) proxy events. The service and its
event loop are built on the first invocation and reused while the execution
environment stays warm.
"""

import asyncio
import base64
import logging

from .config import load_config
from .bootstrap import create_service
from .lib.common.logging_config import setup_logging
from .lib.router import RequestRouter

logger = logging.getLogger("shortlink.lambda")

_loop = None
_router = None


def _get_router() -> RequestRouter:
    global _loop, _router
    if _router is None:
        config = load_config()
        log = setup_logging(level=config.log_level, json_format=config.log_json)
        _loop = asyncio.new_event_loop()
        service = _loop.run_until_complete(create_service(config, log))
        _router = RequestRouter(
            service,
            cors_allow_origin=config.cors_allow_origin,
            logger=log.getChild("router"),
        )
    return _router


def parse_event(event: dict):
    """Normalize a proxy event into (method, path, body)."""
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method") or ""
    path = event.get("path") or event.get("rawPath") or "/"
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        # Left as bytes; the router decodes strictly
        body = base64.b64decode(body)
    return method, path, body


def handler(event, context):
    """Lambda entry point."""
    method, path, body = parse_event(event or {})
    logger.info(f"Received {method or '<none>'} {path}")

    router = _get_router()
    result = _loop.run_until_complete(router.dispatch(method, path, body))

    return {
        "statusCode": result.status_code,
        "headers": result.headers,
        "body": result.body,
    }


def reset() -> None:
    """Drop the cached router and loop (used by tests)."""
    global _loop, _router
    if _router is not None:
        _loop.run_until_complete(_router.service.close())
        _loop.close()
    _loop = None
    _router = None
