"""
fleet_records.services.relationships

Relationship orchestrator across drivers, vehicles and trips.

Responsibilities:
- Create a driver, optionally with a vehicle assigned to it.
- Create a vehicle, optionally with a new or existing driver.
- Aggregate reads: driver detail (driver + vehicle + trips), trip detail
  (trip + driver + vehicle).
- Delete a driver after releasing the vehicle it operates.

Driver creation is idempotent on the natural key. The insert is attempted
first and the store's unique constraint decides; on conflict the existing row
is fetched and returned. Two concurrent creations with the same identification
number therefore both resolve to the single stored driver.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.repositories.drivers import DriverRepo
from fleet_records.db.repositories.trips import TripRepo
from fleet_records.db.repositories.vehicles import VehicleRepo
from fleet_records.errors import ConflictError
from fleet_records.observability.logging import get_logger
from fleet_records.records import Driver, DriverCreation, DriverDetail, TripDetail, Vehicle

log = get_logger(__name__)


class RelationshipOrchestrator:
    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor
        self._drivers = DriverRepo(executor)
        self._vehicles = VehicleRepo(executor)
        self._trips = TripRepo(executor)

    async def create_driver_with_optional_vehicle(
        self,
        driver_fields: Mapping[str, Any],
        vehicle_fields: Mapping[str, Any] | None = None,
    ) -> DriverCreation:
        if vehicle_fields is not None:
            # Reject a bad vehicle payload before any row is written.
            VehicleRepo.validate_new(vehicle_fields)

        driver, created = await self._resolve_driver(driver_fields)

        vehicle: Vehicle | None = None
        if vehicle_fields is not None:
            # The unique constraint on vehicles.driver_id rejects a second vehicle.
            vehicle = await self._vehicles.create(
                {**vehicle_fields, "driver_id": driver.driver_id}
            )
        return DriverCreation(driver=driver, vehicle=vehicle, created=created)

    async def create_vehicle_with_optional_driver(
        self,
        vehicle_fields: Mapping[str, Any],
        driver: int | Mapping[str, Any] | None = None,
    ) -> Vehicle:
        """
        `driver` is either an existing driver id or the fields of a new driver.
        Without it, a `driver_id` inside `vehicle_fields` is honoured as given.
        """

        fields = dict(vehicle_fields)
        VehicleRepo.validate_new(fields)

        if isinstance(driver, Mapping):
            creation = await self.create_driver_with_optional_vehicle(driver)
            fields["driver_id"] = creation.driver.driver_id
        elif driver is not None:
            fields["driver_id"] = driver

        vehicle = await self._vehicles.create(fields)
        if vehicle.driver_id is None:
            return vehicle
        return await self._vehicles.get(vehicle.vehicle_id)

    async def get_driver_detail(self, driver_id: int) -> DriverDetail:
        driver = await self._drivers.get(driver_id)
        vehicle, trips = await asyncio.gather(
            self._vehicles.get_for_driver(driver_id),
            self._trips.list_for_driver(driver_id),
        )
        return DriverDetail(driver=driver, vehicle=vehicle, trips=trips)

    async def get_trip_detail(self, trip_id: int) -> TripDetail:
        trip = await self._trips.get(trip_id)
        driver, vehicle = await asyncio.gather(
            self._drivers.get(trip.driver_id),
            self._vehicles.get_for_driver(trip.driver_id),
        )
        return TripDetail(trip=trip, driver=driver, vehicle=vehicle)

    async def delete_driver(self, driver_id: int) -> int:
        """
        Release the driver's vehicle, then delete the driver, atomically.

        Trips are never removed here: while any trip references the driver the
        store rejects the delete with a foreign-key `ConflictError` and the
        vehicle keeps its assignment.
        """

        async with self._executor.transaction() as tx:
            await VehicleRepo(tx).unassign_driver(driver_id)
            return await DriverRepo(tx).delete(driver_id)

    async def _resolve_driver(self, fields: Mapping[str, Any]) -> tuple[Driver, bool]:
        try:
            return await self._drivers.create(fields), True
        except ConflictError as exc:
            if exc.kind != "unique":
                raise
            existing = await self._drivers.find_by_identification_number(
                fields["identification_number"]
            )
            if existing is None:
                raise
            log.info("driver_reused", driver_id=existing.driver_id)
            return existing, False


# --- Module Notes -----------------------------------------------------------
# Creation flows are sequences of single-statement transactions, not one
# transaction: on PostgreSQL a failed INSERT aborts its transaction, which would
# make the natural-key re-fetch impossible.
