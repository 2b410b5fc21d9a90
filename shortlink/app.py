#!/usr/bin/env python3
"""
Main entry point for the short link service.

Usage:
    shortlink-server
    python -m shortlink.app

Environment variables:
    STORE_BACKEND - memory, postgres or dynamodb
    DATABASE_URL - PostgreSQL connection URL
    DYNAMODB_TABLE - DynamoDB table name
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager
from urllib.parse import urlsplit, urlunsplit

import uvicorn
from fastapi import FastAPI

from .config import load_config
from .bootstrap import create_service
from .lib.common.logging_config import setup_logging
from .web_app import create_app, attach_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    service = await create_service(config, logger)
    attach_service(app, service)
    logger.info(f"Link service ready (store={service.store.name})")

    yield

    await service.close()
    logger.info("Link service stopped")


def _redacted(config) -> dict:
    """Config as a dict with credentials in connection URLs masked."""
    settings = config.model_dump()
    for key in ("database_url", "redis_url"):
        value = settings.get(key)
        if value:
            parts = urlsplit(value)
            if parts.password:
                netloc = parts.netloc.replace(f":{parts.password}@", ":***@")
                settings[key] = urlunsplit(parts._replace(netloc=netloc))
    return settings


def main():
    """Run the HTTP server until SIGINT or SIGTERM."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    logger.info(f"Configuration: {_redacted(config)}")

    app = create_app(service_instance=None, config=config, logger=logger)
    app.router.lifespan_context = lifespan

    # LoggingMiddleware writes the access log
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=False,
        )
    )

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    logger.info(f"Listening on {config.host}:{config.port} (store={config.store_backend})")
    try:
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
