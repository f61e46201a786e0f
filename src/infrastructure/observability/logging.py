"""Structured logging configuration with OpenTelemetry integration.

Configures structlog for JSON or console logging, binds the service name,
adds trace/span ids from the active OpenTelemetry span and masks sensitive
values (credentials and contact details) before rendering.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from src.infrastructure.config import get_settings

SECRET_KEYS = frozenset(
    {
        "api_key",
        "apikey",
        "token",
        "password",
        "secret",
        "authorization",
        "connection_string",
    }
)

CONTACT_KEYS = frozenset(
    {
        "email",
        "owner_email",
        "phone",
        "owner_phone",
    }
)


def configure_logging() -> None:
    """Configure structured logging with structlog.

    Sets up:
    - Log level and renderer (JSON or console) from ObservabilitySettings
    - Service name on every event
    - Correlation IDs from OpenTelemetry trace context
    - Masking of sensitive values
    - Standard library logging integration
    """
    settings = get_settings().observability
    level = getattr(logging, settings.level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_name_adder(settings.service_name),
        _add_trace_context,
        _filter_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if settings.json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _service_name_adder(service_name: str):
    def add_service_name(
        logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service_name


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add trace_id and span_id of the active span, if any.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Log event dictionary

    Returns:
        Updated event dictionary with trace context
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def mask_value(key: str, value: Any) -> Any:
    """Mask a single value if its key names sensitive data.

    Secrets keep their first 4 characters; contact details keep their last 4.
    """
    if not isinstance(key, str) or value is None:
        return value

    normalized = key.lower()
    if normalized in SECRET_KEYS:
        if isinstance(value, str) and len(value) > 4:
            return f"{value[:4]}{'*' * (len(value) - 4)}"
        return "***REDACTED***"

    if normalized in CONTACT_KEYS:
        text = str(value)
        if len(text) > 4:
            return f"{'*' * (len(text) - 4)}{text[-4:]}"
        return "***REDACTED***"

    return value


def _filter_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask sensitive values, recursing into nested dictionaries."""

    def filter_dict(d: dict[str, Any]) -> dict[str, Any]:
        return {
            k: mask_value(k, filter_dict(v) if isinstance(v, dict) else v)
            for k, v in d.items()
        }

    return filter_dict(event_dict)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Indicator loaded", indicator_id=42, owner_email="ops@example.com")
    """
    return structlog.get_logger(name)
