"""
fleet_records.api.routers.trips

Trip endpoints.

Responsibilities:
- List trips with the filter panel's criteria, read, create, patch, delete.
- Serve the trip detail aggregate (trip + driver + vehicle).
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from fleet_records.api.deps import orchestrator_dep, trip_repo
from fleet_records.api.schemas import TripFields, TripPatch
from fleet_records.db.repositories.trips import TripRepo
from fleet_records.records import Province, Trip, TripDetail, TripFilters
from fleet_records.services.relationships import RelationshipOrchestrator

router = APIRouter(prefix="/v1/trips", tags=["trips"])


@router.get("", response_model=list[Trip])
async def list_trips(
    province: Province | None = None,
    product: str | None = None,
    driver_id: int | None = None,
    container_number: str | None = None,
    load_date_from: date | None = None,
    load_date_to: date | None = None,
    trip_payment_min: float | None = None,
    trip_payment_max: float | None = None,
    trips: TripRepo = Depends(trip_repo),
) -> list[Trip]:
    filters = TripFilters(
        province=province,
        product=product,
        driver_id=driver_id,
        container_number=container_number,
        load_date_from=load_date_from,
        load_date_to=load_date_to,
        trip_payment_min=trip_payment_min,
        trip_payment_max=trip_payment_max,
    )
    if filters == TripFilters():
        return await trips.list_all()
    return await trips.search(filters)


@router.post("", response_model=Trip, status_code=HTTP_201_CREATED)
async def create_trip(body: TripFields, trips: TripRepo = Depends(trip_repo)) -> Trip:
    return await trips.create(body.model_dump(exclude_unset=True))


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(trip_id: int, trips: TripRepo = Depends(trip_repo)) -> Trip:
    return await trips.get(trip_id)


@router.get("/{trip_id}/detail", response_model=TripDetail)
async def get_trip_detail(
    trip_id: int,
    orchestrator: RelationshipOrchestrator = Depends(orchestrator_dep),
) -> TripDetail:
    return await orchestrator.get_trip_detail(trip_id)


@router.patch("/{trip_id}", response_model=Trip)
async def update_trip(
    trip_id: int,
    body: TripPatch,
    trips: TripRepo = Depends(trip_repo),
) -> Trip:
    return await trips.update(trip_id, body.model_dump(exclude_unset=True))


@router.delete("/{trip_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_trip(trip_id: int, trips: TripRepo = Depends(trip_repo)) -> None:
    await trips.delete(trip_id)
