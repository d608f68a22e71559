"""Correlated logging for the DSR generator."""

from core.observability.logging import (
    CorrelationContext,
    configure_logging,
    get_correlation_context,
    get_logger,
    log_stage,
    with_correlation,
)

__all__ = [
    "CorrelationContext",
    "configure_logging",
    "get_correlation_context",
    "get_logger",
    "log_stage",
    "with_correlation",
]
