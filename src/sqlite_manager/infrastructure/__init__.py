"""Infrastructure layer - cross-cutting concerns."""

from sqlite_manager.infrastructure.config import Config, DatabaseConfig, get_config
from sqlite_manager.infrastructure.logging import get_logger, setup_logging
from sqlite_manager.infrastructure.metrics import MetricsRegistry, setup_metrics
from sqlite_manager.infrastructure.tracing import (
    get_tracer,
    operation_span,
    setup_tracing,
    trace_span,
)

__all__ = [
    "Config",
    "DatabaseConfig",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "operation_span",
    "trace_span",
]
