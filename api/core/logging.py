"""
Structured Logging
==================
structlog configuration with request correlation IDs.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog


def add_service_context(service_name: str, environment: str):
    """Processor adding service and environment to every event."""
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("environment", environment)
        return event_dict
    return processor


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    service_name: str = "cfip",
    environment: str = "production"
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Log level name
        json_format: JSON output (production) or console rendering (development)
        service_name: Name of the service, bound to every event
        environment: Environment name, bound to every event
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer() if json_format
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_context(service_name, environment),
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    structlog.get_logger().info(
        "logging_initialized",
        json_format=json_format
    )


def bind_request_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> str:
    """
    Bind request/correlation IDs for the current context.

    Returns:
        The request ID
    """
    if request_id is None:
        request_id = str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        correlation_id=correlation_id or request_id
    )
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "add_service_context",
    "setup_logging",
    "bind_request_context",
    "clear_request_context",
]
