"""
fleet_records.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text

from fleet_records.api.deps import executor_dep
from fleet_records.db.executor import QueryExecutor

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(executor: QueryExecutor = Depends(executor_dep)) -> dict[str, str]:
    # A QueryError here surfaces as 503 through the shared error handlers.
    await executor.execute(text("SELECT 1"))
    return {"status": "ready"}
