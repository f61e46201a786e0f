"""Observability infrastructure module.

Provides structured logging with OpenTelemetry trace correlation.
"""

from src.infrastructure.observability.logging import (
    configure_logging,
    get_logger,
    mask_value,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "mask_value",
]
