"""
fleet_records.db.repositories.vehicles

Repository for vehicles.

Responsibilities:
- CRUD over the `vehicles` table through the query executor.
- Driver-joined reads: the assigned driver is embedded on the returned vehicle.
- Direct lookup of the vehicle operated by a given driver.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, delete, insert, inspect, or_, select, update

from fleet_records.db.executor import QueryExecutor, Record
from fleet_records.db.models import Driver as DriverRow
from fleet_records.db.models import Vehicle as VehicleRow
from fleet_records.db.repositories._fields import (
    FieldSpec,
    as_id,
    as_text,
    insert_values,
    labeled,
    update_values,
)
from fleet_records.db.repositories.drivers import DRIVER_FIELD_NAMES, DRIVERS
from fleet_records.errors import NotFoundError, ValidationError
from fleet_records.records import Driver, Vehicle

VEHICLES = VehicleRow.__table__
_c = inspect(VehicleRow).columns
_d = inspect(DriverRow).columns

VEHICLE_FIELDS = (
    FieldSpec(
        "cuna_circulation_number",
        _c.cuna_circulation_number,
        normalize=as_text,
        aliases=("cuña_circulation_number",),
    ),
    FieldSpec("plancha_circulation_number", _c.plancha_circulation_number, normalize=as_text),
    FieldSpec(
        "cuna_plate_number",
        _c.cuna_plate_number,
        normalize=as_text,
        aliases=("cuña_plate_number",),
    ),
    FieldSpec("plancha_plate_number", _c.plancha_plate_number, normalize=as_text),
    FieldSpec("driver_id", _c.driver_id, normalize=as_id),
)

IDENTIFIER_COLUMNS = tuple(f.column for f in VEHICLE_FIELDS if f.name != "driver_id")

VEHICLE_COLUMNS = labeled(_c, "vehicle_id", *(f.name for f in VEHICLE_FIELDS))

# Both tables carry `driver_id`; joined driver columns get their own prefix.
_DRIVER_PREFIX = "driver__"
_JOINED_DRIVER_COLUMNS = labeled(_d, *DRIVER_FIELD_NAMES, prefix=_DRIVER_PREFIX)


def _joined() -> Select[Any]:
    return select(*VEHICLE_COLUMNS, *_JOINED_DRIVER_COLUMNS).select_from(
        VEHICLES.outerjoin(DRIVERS, _d.driver_id == _c.driver_id)
    )


def _to_vehicle(row: Record) -> Vehicle:
    own: dict[str, Any] = {}
    driver: dict[str, Any] = {}
    for key, value in row.items():
        if key.startswith(_DRIVER_PREFIX):
            driver[key.removeprefix(_DRIVER_PREFIX)] = value
        else:
            own[key] = value
    if driver.get("driver_id") is not None:
        own["driver"] = Driver.model_validate(driver)
    return Vehicle.model_validate(own)


class VehicleRepo:
    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    async def list_all(self, *, q: str | None = None) -> list[Vehicle]:
        stmt = _joined().order_by(_c.vehicle_id)
        if q:
            stmt = stmt.where(or_(*(col.icontains(q, autoescape=True) for col in IDENTIFIER_COLUMNS)))
        return [_to_vehicle(r) for r in await self._executor.execute(stmt)]

    async def get(self, vehicle_id: int) -> Vehicle:
        rows = await self._executor.execute(_joined().where(_c.vehicle_id == vehicle_id))
        if not rows:
            raise NotFoundError("vehicle", vehicle_id)
        return _to_vehicle(rows[0])

    async def get_for_driver(self, driver_id: int) -> Vehicle | None:
        # Filtered in the store: one round trip regardless of fleet size.
        rows = await self._executor.execute(_joined().where(_c.driver_id == driver_id).limit(1))
        return _to_vehicle(rows[0]) if rows else None

    @staticmethod
    def validate_new(fields: Mapping[str, Any]) -> dict[Any, Any]:
        values = insert_values(VEHICLE_FIELDS, fields)
        if not any(col in values for col in IDENTIFIER_COLUMNS):
            raise ValidationError("at least one circulation or plate number is required")
        return values

    async def create(self, fields: Mapping[str, Any]) -> Vehicle:
        values = self.validate_new(fields)
        stmt = insert(VEHICLES).values(values).returning(*VEHICLE_COLUMNS)
        rows = await self._executor.execute(stmt)
        return Vehicle.model_validate(rows[0])

    async def update(self, vehicle_id: int, patch: Mapping[str, Any]) -> Vehicle:
        values = update_values(VEHICLE_FIELDS, patch)
        stmt = (
            update(VEHICLES)
            .where(_c.vehicle_id == vehicle_id)
            .values(values)
            .returning(_c.vehicle_id)
        )
        if not await self._executor.execute(stmt):
            raise NotFoundError("vehicle", vehicle_id)
        return await self.get(vehicle_id)

    async def unassign_driver(self, driver_id: int) -> int:
        stmt = (
            update(VEHICLES)
            .where(_c.driver_id == driver_id)
            .values({_c.driver_id: None})
            .returning(_c.vehicle_id)
        )
        return len(await self._executor.execute(stmt))

    async def delete(self, vehicle_id: int) -> int:
        stmt = delete(VEHICLES).where(_c.vehicle_id == vehicle_id).returning(_c.vehicle_id)
        return len(await self._executor.execute(stmt))

    async def delete_all(self) -> int:
        return len(await self._executor.execute(delete(VEHICLES).returning(_c.vehicle_id)))


# --- Module Notes -----------------------------------------------------------
# `update` re-reads through the join so callers get the embedded driver back.
