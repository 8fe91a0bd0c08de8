"""Unit tests for configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from sqlite_manager.infrastructure.config import (
    Config,
    DatabaseConfig,
    ObservabilityConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Default config."""
        config = Config()

        assert config.database.path == Path("data/app.db")
        assert config.database.encryption_key is None
        assert config.database.timeout_seconds == 5.0
        assert config.database.foreign_keys is False
        assert config.server.port == 8000
        assert config.observability.log_format == "json"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
        """Environment variables override defaults."""
        monkeypatch.setenv("SQLITE_MANAGER_DATABASE__PATH", str(temp_dir / "env.db"))
        monkeypatch.setenv("SQLITE_MANAGER_DATABASE__ENCRYPTION_KEY", "s3cret")
        monkeypatch.setenv("SQLITE_MANAGER_OBSERVABILITY__LOG_LEVEL", "DEBUG")

        config = Config()

        assert config.database.path == temp_dir / "env.db"
        assert config.database.encryption_key is not None
        assert config.database.encryption_key.get_secret_value() == "s3cret"
        assert config.observability.log_level == "DEBUG"

    def test_encryption_key_hidden_in_repr(self) -> None:
        """Encryption key hidden in repr."""
        database = DatabaseConfig(encryption_key="s3cret")

        assert "s3cret" not in repr(database)

    def test_ensure_directories(self, temp_dir: Path) -> None:
        """Ensure directories."""
        config = Config(database=DatabaseConfig(path=temp_dir / "nested" / "dir" / "app.db"))

        config.ensure_directories()

        assert (temp_dir / "nested" / "dir").is_dir()

    def test_invalid_timeout(self) -> None:
        """Invalid timeout."""
        with pytest.raises(ValueError):
            DatabaseConfig(timeout_seconds=0)

    def test_invalid_log_level(self) -> None:
        """Invalid log level."""
        with pytest.raises(ValueError):
            ObservabilityConfig(log_level="LOUD")  # type: ignore[arg-type]


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(
        self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path
    ) -> None:
        """Get config returns same instance."""
        monkeypatch.setenv("SQLITE_MANAGER_DATABASE__PATH", str(temp_dir / "cfg" / "app.db"))
        get_config.cache_clear()
        try:
            config1 = get_config()
            config2 = get_config()
            assert config1 is config2
            assert (temp_dir / "cfg").is_dir()
        finally:
            get_config.cache_clear()
