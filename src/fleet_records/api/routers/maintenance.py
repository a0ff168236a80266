"""
fleet_records.api.routers.maintenance

Maintenance endpoints.

Responsibilities:
- Wipe every record (trips, vehicles, drivers) in one transaction.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from fleet_records.api.deps import lifecycle_dep
from fleet_records.services.lifecycle import LifecycleService

router = APIRouter(prefix="/v1/maintenance", tags=["maintenance"])


@router.post("/wipe")
async def wipe_all(lifecycle: LifecycleService = Depends(lifecycle_dep)) -> dict[str, int]:
    # Returns the number of rows removed per table.
    return asdict(await lifecycle.wipe_all())
