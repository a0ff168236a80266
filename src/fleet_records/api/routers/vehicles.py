"""
fleet_records.api.routers.vehicles

Vehicle endpoints.

Responsibilities:
- List/search, read, patch and delete vehicles (reads embed the driver).
- Create a vehicle, optionally assigned to an existing or a new driver.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from fleet_records.api.deps import orchestrator_dep, vehicle_repo
from fleet_records.api.schemas import DriverFields, VehicleFields, VehiclePatch
from fleet_records.db.repositories.vehicles import VehicleRepo
from fleet_records.records import Vehicle
from fleet_records.services.relationships import RelationshipOrchestrator

router = APIRouter(prefix="/v1/vehicles", tags=["vehicles"])


class VehicleCreateRequest(VehicleFields):
    driver_id: int | None = None
    driver: DriverFields | None = None


@router.get("", response_model=list[Vehicle])
async def list_vehicles(
    q: str | None = None,
    vehicles: VehicleRepo = Depends(vehicle_repo),
) -> list[Vehicle]:
    return await vehicles.list_all(q=q)


@router.post("", response_model=Vehicle, status_code=HTTP_201_CREATED)
async def create_vehicle(
    body: VehicleCreateRequest,
    orchestrator: RelationshipOrchestrator = Depends(orchestrator_dep),
) -> Vehicle:
    if body.driver_id is not None and body.driver is not None:
        raise HTTPException(status_code=422, detail="give either driver_id or driver, not both")

    driver: int | dict[str, Any] | None = body.driver_id
    if body.driver is not None:
        driver = body.driver.model_dump(exclude_unset=True)
    return await orchestrator.create_vehicle_with_optional_driver(
        body.model_dump(exclude={"driver", "driver_id"}, exclude_unset=True),
        driver,
    )


@router.get("/{vehicle_id}", response_model=Vehicle)
async def get_vehicle(vehicle_id: int, vehicles: VehicleRepo = Depends(vehicle_repo)) -> Vehicle:
    return await vehicles.get(vehicle_id)


@router.patch("/{vehicle_id}", response_model=Vehicle)
async def update_vehicle(
    vehicle_id: int,
    body: VehiclePatch,
    vehicles: VehicleRepo = Depends(vehicle_repo),
) -> Vehicle:
    return await vehicles.update(vehicle_id, body.model_dump(exclude_unset=True))


@router.delete("/{vehicle_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_vehicle(vehicle_id: int, vehicles: VehicleRepo = Depends(vehicle_repo)) -> None:
    await vehicles.delete(vehicle_id)
