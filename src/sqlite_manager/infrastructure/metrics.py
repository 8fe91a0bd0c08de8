"""Prometheus metrics for the SQLite manager."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all SQLite manager metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Statement metrics
        self.statements_total = Counter(
            "sqlite_statements_total",
            "Total number of manager operations executed",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.statement_latency_seconds = Histogram(
            "sqlite_statement_latency_seconds",
            "Manager operation latency in seconds",
            ["operation"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        # Transaction metrics
        self.batch_rollbacks_total = Counter(
            "sqlite_batch_rollbacks_total",
            "Total batches rolled back after a failing statement",
            registry=self._registry,
        )

        # Schema metrics
        self.table_migrations_total = Counter(
            "sqlite_table_migrations_total",
            "Total destructive table migrations applied",
            ["table"],
            registry=self._registry,
        )

        # Lock metrics
        self.lock_wait_seconds = Histogram(
            "sqlite_lock_wait_seconds",
            "Time spent waiting for the manager lock",
            buckets=(0.0001, 0.001, 0.01, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.info = Info(
            "sqlite_manager",
            "SQLite manager information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    metrics = MetricsRegistry(registry)

    from sqlite_manager import __version__
    metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return metrics
