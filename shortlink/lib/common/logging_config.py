"""Logging setup shared by the server, the CLI and the Lambda adapter."""

import json
import logging
import sys
from typing import Optional

ROOT_LOGGER = "shortlink"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "asyncpg")


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``shortlink`` logger and return it.

    Calling this again replaces the handlers, so it is safe to run once per
    entry point (server start, CLI invocation, Lambda cold start).

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write to this file when set
        json_format: Emit JSON lines instead of plain text
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logger
