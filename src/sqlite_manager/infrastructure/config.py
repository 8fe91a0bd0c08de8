"""Configuration management for the SQLite manager."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database file configuration."""

    path: Path = Field(default=Path("data/app.db"), description="Database file path")
    encryption_key: SecretStr | None = Field(
        default=None, description="Passphrase for SQLCipher-enabled builds"
    )
    timeout_seconds: float = Field(
        default=5.0, gt=0, description="Seconds sqlite3 waits on a locked file"
    )
    foreign_keys: bool = Field(default=False, description="Enable PRAGMA foreign_keys")


class ServerConfig(BaseModel):
    """REST server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(
        default="sqlite_manager", description="Service name for tracing"
    )


class Config(BaseSettings):
    """Main configuration for the SQLite manager."""

    model_config = SettingsConfigDict(
        env_prefix="SQLITE_MANAGER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the database directory exists."""
        self.database.path.resolve().parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config
