"""REST API adapter for the SQLite manager.

This module provides a FastAPI-based REST API over a SqliteDatabaseManager.
Request bodies use the camelCase template fields JSON clients send
(``sqlExpression``, ``params``, ``tableName``, ``createSql``, ``columnNames``).

Endpoints:
    GET  /health                    - Health check
    GET  /stats                     - Manager statistics
    POST /query                     - Rows for a template
    POST /scalar                    - First value for a template
    POST /execute                   - Run one template
    POST /execute/batch             - Run templates in one transaction
    GET  /tables/{name}/version     - Stored schema version
    POST /tables                    - Versioned create-table
    POST /tables/{name}/upsert      - Insert-or-replace rows

Usage:
    from sqlite_manager.adapters.inbound.rest_api import create_app
    from sqlite_manager import SqliteDatabaseManager

    app = create_app(SqliteDatabaseManager("data/app.db"))
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import base64
import sqlite3
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from sqlite_manager import __version__
from sqlite_manager.application import SqliteDatabaseManager
from sqlite_manager.domain.entities import CreateTableSpec, SqlTemplate, UpsertSpec
from sqlite_manager.domain.errors import SqliteManagerError
from sqlite_manager.infrastructure.logging import get_logger

logger = get_logger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TemplateRequest(_CamelModel):
    """Request model for a SQL template."""

    sql_expression: str = Field(..., alias="sqlExpression", description="SQL with ? placeholders")
    params: list[Any] = Field(default_factory=list, description="Positional parameters")

    def to_template(self) -> SqlTemplate:
        return SqlTemplate.from_dict(self.model_dump(by_alias=True))


class CreateTableRequest(_CamelModel):
    """Request model for a versioned create-table."""

    table_name: str = Field(..., alias="tableName", min_length=1, description="Table to (re)create")
    version: int = Field(..., ge=0, description="Schema version the DDL produces")
    create_sql: str = Field(..., alias="createSql", description="CREATE TABLE statement")

    def to_spec(self) -> CreateTableSpec:
        return CreateTableSpec.from_dict(self.model_dump(by_alias=True))


class UpsertRequest(_CamelModel):
    """Request model for insert-or-replace."""

    column_names: list[str] = Field(..., alias="columnNames", min_length=1)
    rows: list[dict[str, Any]] = Field(default_factory=list)

    def to_spec(self, table_name: str) -> UpsertSpec:
        return UpsertSpec.from_dict({"tableName": table_name, **self.model_dump(by_alias=True)})


class QueryResponse(BaseModel):
    rows: list[dict[str, Any]] = Field(default_factory=list, description="Result rows")
    count: int = Field(0, description="Number of rows")


class ScalarResponse(BaseModel):
    value: Any = Field(None, description="First column of the first row")


class AffectedResponse(BaseModel):
    affected_rows: int = Field(0, description="Number of affected rows")


class VersionResponse(BaseModel):
    table_name: str
    version: int


class HealthResponse(BaseModel):
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def _jsonable_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{column: _jsonable(value) for column, value in row.items()} for row in rows]


def create_app(db: SqliteDatabaseManager) -> FastAPI:
    """Create a FastAPI application for a manager.

    Args:
        db: The manager to expose.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="SQLite Manager API",
        description="REST API for templated SQL, table versions and upserts",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SqliteManagerError)
    async def validation_error_handler(request: Request, exc: SqliteManagerError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(sqlite3.Error)
    async def engine_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.warning("engine_error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy" if db.is_initialized else "uninitialized",
            version=__version__,
        )

    @app.get("/stats", tags=["Stats"])
    def get_stats() -> dict[str, Any]:
        return db.get_stats()

    @app.post("/query", response_model=QueryResponse, tags=["SQL"])
    def query(request: TemplateRequest) -> QueryResponse:
        rows = db.query(request.to_template())
        return QueryResponse(rows=_jsonable_rows(rows), count=len(rows))

    @app.post("/scalar", response_model=ScalarResponse, tags=["SQL"])
    def scalar(request: TemplateRequest) -> ScalarResponse:
        return ScalarResponse(value=_jsonable(db.execute_scalar(request.to_template())))

    @app.post("/execute", response_model=AffectedResponse, tags=["SQL"])
    def execute(request: TemplateRequest) -> AffectedResponse:
        return AffectedResponse(affected_rows=db.execute_non_query(request.to_template()))

    @app.post("/execute/batch", response_model=AffectedResponse, tags=["SQL"])
    def execute_batch(requests: list[TemplateRequest]) -> AffectedResponse:
        affected = db.execute_batch([r.to_template() for r in requests])
        return AffectedResponse(affected_rows=affected)

    @app.get("/tables/{table_name}/version", response_model=VersionResponse, tags=["Tables"])
    def table_version(table_name: str) -> VersionResponse:
        return VersionResponse(table_name=table_name, version=db.get_table_version(table_name))

    @app.post("/tables", response_model=AffectedResponse, tags=["Tables"])
    def ensure_table(request: CreateTableRequest) -> AffectedResponse:
        return AffectedResponse(affected_rows=db.ensure_table(request.to_spec()))

    @app.post("/tables/{table_name}/upsert", response_model=AffectedResponse, tags=["Tables"])
    def upsert(table_name: str, request: UpsertRequest) -> AffectedResponse:
        return AffectedResponse(affected_rows=db.upsert(request.to_spec(table_name), request.rows))

    return app


def run_server(
    db: SqliteDatabaseManager,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        db: The manager to expose.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    db.initialize()
    uvicorn.run(create_app(db), host=host, port=port)


if __name__ == "__main__":
    from sqlite_manager.infrastructure import (
        get_config,
        setup_logging,
        setup_metrics,
        setup_tracing,
    )

    config = get_config()
    observability = config.observability
    setup_logging(observability.log_level, observability.log_format)
    setup_tracing(observability.otel_service_name, observability.otel_endpoint)
    metrics = setup_metrics(config.server.metrics_port)
    run_server(
        SqliteDatabaseManager.from_config(config, metrics=metrics),
        host=config.server.host,
        port=config.server.port,
    )
