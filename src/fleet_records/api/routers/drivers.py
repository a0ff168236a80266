"""
fleet_records.api.routers.drivers

Driver endpoints.

Responsibilities:
- List/search, read, patch and delete drivers.
- Create a driver, optionally together with its vehicle (idempotent on the
  identification number).
- Serve the driver detail aggregate (driver + vehicle + trips).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_200_OK, HTTP_201_CREATED, HTTP_204_NO_CONTENT

from fleet_records.api.deps import driver_repo, orchestrator_dep
from fleet_records.api.schemas import DriverCreateResponse, DriverFields, DriverPatch, VehicleFields
from fleet_records.db.repositories.drivers import DriverRepo
from fleet_records.records import Driver, DriverDetail
from fleet_records.services.relationships import RelationshipOrchestrator

router = APIRouter(prefix="/v1/drivers", tags=["drivers"])


class DriverCreateRequest(DriverFields):
    vehicle: VehicleFields | None = None


@router.get("", response_model=list[Driver])
async def list_drivers(
    q: str | None = None,
    drivers: DriverRepo = Depends(driver_repo),
) -> list[Driver]:
    return await drivers.list_all(q=q)


@router.post("", response_model=DriverCreateResponse, status_code=HTTP_201_CREATED)
async def create_driver(
    body: DriverCreateRequest,
    response: Response,
    orchestrator: RelationshipOrchestrator = Depends(orchestrator_dep),
) -> DriverCreateResponse:
    vehicle = body.vehicle.model_dump(exclude_unset=True) if body.vehicle is not None else None
    creation = await orchestrator.create_driver_with_optional_vehicle(
        body.model_dump(exclude={"vehicle"}, exclude_unset=True),
        vehicle,
    )
    if not creation.created:
        # Re-entry with a known identification number returns the stored driver.
        response.status_code = HTTP_200_OK
    return DriverCreateResponse(
        driver=creation.driver, vehicle=creation.vehicle, created=creation.created
    )


@router.get("/{driver_id}", response_model=Driver)
async def get_driver(driver_id: int, drivers: DriverRepo = Depends(driver_repo)) -> Driver:
    return await drivers.get(driver_id)


@router.get("/{driver_id}/detail", response_model=DriverDetail)
async def get_driver_detail(
    driver_id: int,
    orchestrator: RelationshipOrchestrator = Depends(orchestrator_dep),
) -> DriverDetail:
    return await orchestrator.get_driver_detail(driver_id)


@router.patch("/{driver_id}", response_model=Driver)
async def update_driver(
    driver_id: int,
    body: DriverPatch,
    drivers: DriverRepo = Depends(driver_repo),
) -> Driver:
    return await drivers.update(driver_id, body.model_dump(exclude_unset=True))


@router.delete("/{driver_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_driver(
    driver_id: int,
    orchestrator: RelationshipOrchestrator = Depends(orchestrator_dep),
) -> None:
    await orchestrator.delete_driver(driver_id)
