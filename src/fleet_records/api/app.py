"""
fleet_records.api.app

FastAPI app factory for the fleet records service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, executor, HTTP client).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from fleet_records import __version__
from fleet_records.api.errors import register_error_handlers
from fleet_records.api.routers.diagnostics import router as diagnostics_router
from fleet_records.api.routers.drivers import router as drivers_router
from fleet_records.api.routers.health import router as health_router
from fleet_records.api.routers.maintenance import router as maintenance_router
from fleet_records.api.routers.trips import router as trips_router
from fleet_records.api.routers.vehicles import router as vehicles_router
from fleet_records.db.executor import QueryExecutor
from fleet_records.db.session import create_engine, create_tables
from fleet_records.observability.logging import configure_logging, get_logger
from fleet_records.observability.middleware import RequestContextMiddleware
from fleet_records.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.json_logs,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # One pooled engine per process; routers reach it through `api.deps`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.executor = QueryExecutor(engine, timeout_s=settings.query_timeout_s)
        app.state.http = httpx.AsyncClient()
        if settings.env in ("dev", "test"):
            await create_tables(engine)
        try:
            yield
        finally:
            await app.state.http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Fleet Records",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(drivers_router)
    app.include_router(vehicles_router)
    app.include_router(trips_router)
    app.include_router(maintenance_router)
    app.include_router(diagnostics_router)

    return app
