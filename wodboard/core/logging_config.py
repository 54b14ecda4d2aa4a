"""Logging configuration using loguru.

This module configures structured logging with environment-specific formatters:
- Local: Colorized console output with source file:line numbers
- Staging/Production: JSON structured logs for parsing by log aggregation tools

Also intercepts standard library logging from third-party libraries.
"""

import json
import logging
import sys

from loguru import logger

from wodboard.config import Settings, get_settings


def sink_serializer(message) -> None:
    """Custom sink that serializes records to clean JSON."""
    record = message.record
    # Build minimal log record with only essential fields
    subset = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        "message": record["message"],
    }

    # Extra fields carry the structured context (athlete_id, window, ...)
    for key, value in record["extra"].items():
        if not key.startswith("_"):
            subset[key] = value

    if record["exception"]:
        exc_type, exc_value, _ = record["exception"]
        subset["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "value": str(exc_value),
        }

    print(json.dumps(subset, default=str), file=sys.stderr)


class InterceptHandler(logging.Handler):
    """Handler that intercepts standard logging and routes to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record by routing to loguru.

        Parameters
        ----------
        record : logging.LogRecord
            The log record to emit
        """
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure loguru logger based on environment settings.

    Removes default handler and configures:
    - Local: Colorized console with readable format
    - Otherwise: JSON serialization for log aggregators

    Parameters
    ----------
    settings : Settings | None
        Settings to read ENVIRONMENT and LOG_LEVEL from.
        If None, uses the cached application settings.
    """
    settings = settings or get_settings()

    logger.remove()

    if settings.ENVIRONMENT == "local":
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            level=settings.LOG_LEVEL,
            colorize=True,
        )
    else:
        logger.add(sink_serializer, level=settings.LOG_LEVEL)

    # Replace standard logging handlers with our interceptor
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.debug(
        "Logging configured",
        app_name=settings.APP_NAME,
        environment=settings.ENVIRONMENT,
        log_level=settings.LOG_LEVEL,
    )
