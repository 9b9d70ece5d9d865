"""
Centralized logging configuration for the CBOT snapshot service.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the service should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
    """
    # Convert string level to logging constant
    log_level = getattr(logging, level.upper())

    # Configure standard library logging
    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    # Build processor chain
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    processors.append(structlog.processors.TimeStamper(fmt="iso"))

    # Add final formatting processor
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    # Configure structlog
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_route_logger(name: str, route: str) -> FilteringBoundLogger:
    """
    Get a logger bound to an HTTP route.

    Args:
        name: Logger name (typically __name__)
        route: Route path being served

    Returns:
        Configured structlog logger for request handling
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="api",
        route=route
    )


def log_batch_counts(
    logger: FilteringBoundLogger,
    stage: str,
    counts: dict[str, int],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log per-batch record counts for one pipeline stage.

    Args:
        logger: Structlog logger instance
        stage: Pipeline stage ("keys", "raw", "parsed")
        counts: Count per batch name (soybean, corn, currency)
        context: Additional context data
    """
    bound_logger = logger.bind(stage=stage, **counts)

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Batch counts")
