"""Pytest configuration and fixtures for sqlite_manager tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from sqlite_manager.adapters.outbound import SQLiteConnectionFactory
from sqlite_manager.application import SqliteDatabaseManager, StatementExecutor
from sqlite_manager.infrastructure.config import Config, DatabaseConfig
from sqlite_manager.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir: Path) -> Path:
    return temp_dir / "data" / "test.db"


@pytest.fixture
def test_config(db_path: Path) -> Config:
    """Provide a test configuration pointing at a temporary database."""
    return Config(database=DatabaseConfig(path=db_path, timeout_seconds=1.0))


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Separate registry to avoid duplicate-collector errors between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def executor(db_path: Path) -> StatementExecutor:
    """Executor over a freshly created database file."""
    factory = SQLiteConnectionFactory(db_path)
    factory.ensure_database()
    return StatementExecutor(factory)


@pytest.fixture
def manager(db_path: Path, metrics_registry: MetricsRegistry) -> SqliteDatabaseManager:
    """Initialized manager over a temporary database."""
    db = SqliteDatabaseManager(db_path, metrics=metrics_registry)
    db.initialize()
    return db


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
