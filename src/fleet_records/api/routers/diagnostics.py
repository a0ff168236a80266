"""
fleet_records.api.routers.diagnostics

Diagnostics endpoints.

Responsibilities:
- Report the hosted database's storage usage for the diagnostics panel.

Failures of the account API are answered here and never reach entity routes.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_502_BAD_GATEWAY, HTTP_503_SERVICE_UNAVAILABLE

from fleet_records.account_clients.storage_usage import (
    StorageUsageClient,
    StorageUsageError,
    StorageUsageNotConfigured,
)
from fleet_records.api.deps import storage_client_dep

router = APIRouter(prefix="/v1/diagnostics", tags=["diagnostics"])


@router.get("/storage")
async def storage_usage(
    project_id: str | None = None,
    client: StorageUsageClient = Depends(storage_client_dep),
) -> dict[str, Any]:
    try:
        usage = await client.storage_usage(project_id=project_id)
    except StorageUsageNotConfigured as exc:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except StorageUsageError as exc:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return usage.as_wire()
