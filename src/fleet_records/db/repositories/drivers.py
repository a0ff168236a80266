"""
fleet_records.db.repositories.drivers

Repository for drivers.

Responsibilities:
- CRUD over the `drivers` table through the query executor.
- Natural-key lookup by identification number.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, inspect, or_, select, update

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.models import Driver as DriverRow
from fleet_records.db.repositories._fields import (
    FieldSpec,
    as_text,
    insert_values,
    labeled,
    update_values,
)
from fleet_records.errors import NotFoundError
from fleet_records.records import Driver

DRIVERS = DriverRow.__table__
# Mapper columns are keyed by attribute name.
_c = inspect(DriverRow).columns

DRIVER_FIELDS = (
    FieldSpec("full_name", _c.full_name, required=True, normalize=as_text),
    FieldSpec(
        "identification_number", _c.identification_number, required=True, normalize=as_text
    ),
    FieldSpec("phone_number", _c.phone_number, required=True, normalize=as_text),
    FieldSpec("operative_license", _c.operative_license, normalize=as_text),
)

DRIVER_FIELD_NAMES = ("driver_id", *(f.name for f in DRIVER_FIELDS))
DRIVER_COLUMNS = labeled(_c, *DRIVER_FIELD_NAMES)


class DriverRepo:
    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    async def list_all(self, *, q: str | None = None) -> list[Driver]:
        stmt = select(*DRIVER_COLUMNS).order_by(_c.full_name, _c.driver_id)
        if q:
            stmt = stmt.where(
                or_(
                    _c.full_name.icontains(q, autoescape=True),
                    _c.identification_number.icontains(q, autoescape=True),
                    _c.phone_number.icontains(q, autoescape=True),
                    _c.operative_license.icontains(q, autoescape=True),
                )
            )
        rows = await self._executor.execute(stmt)
        return [Driver.model_validate(r) for r in rows]

    async def get(self, driver_id: int) -> Driver:
        rows = await self._executor.execute(
            select(*DRIVER_COLUMNS).where(_c.driver_id == driver_id)
        )
        if not rows:
            raise NotFoundError("driver", driver_id)
        return Driver.model_validate(rows[0])

    async def find_by_identification_number(self, identification_number: str) -> Driver | None:
        rows = await self._executor.execute(
            select(*DRIVER_COLUMNS).where(_c.identification_number == identification_number)
        )
        return Driver.model_validate(rows[0]) if rows else None

    async def create(self, fields: Mapping[str, Any]) -> Driver:
        values = insert_values(DRIVER_FIELDS, fields)
        stmt = insert(DRIVERS).values(values).returning(*DRIVER_COLUMNS)
        rows = await self._executor.execute(stmt)
        return Driver.model_validate(rows[0])

    async def update(self, driver_id: int, patch: Mapping[str, Any]) -> Driver:
        values = update_values(DRIVER_FIELDS, patch)
        stmt = (
            update(DRIVERS)
            .where(_c.driver_id == driver_id)
            .values(values)
            .returning(*DRIVER_COLUMNS)
        )
        rows = await self._executor.execute(stmt)
        if not rows:
            raise NotFoundError("driver", driver_id)
        return Driver.model_validate(rows[0])

    async def delete(self, driver_id: int) -> int:
        stmt = delete(DRIVERS).where(_c.driver_id == driver_id).returning(_c.driver_id)
        return len(await self._executor.execute(stmt))

    async def delete_all(self) -> int:
        # Callers must clear vehicles and trips first (see services.lifecycle).
        return len(await self._executor.execute(delete(DRIVERS).returning(_c.driver_id)))
