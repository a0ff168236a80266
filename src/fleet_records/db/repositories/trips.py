"""
fleet_records.db.repositories.trips

Repository for trips.

Responsibilities:
- CRUD over the `trips` table through the query executor.
- Per-driver listing, most recent load first.
- Filtered search (province, product, driver, container, date and payment ranges).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, time
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import Float, cast, delete, insert, inspect, select, update

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.models import Trip as TripRow
from fleet_records.db.repositories._fields import (
    FieldSpec,
    as_id,
    as_text,
    insert_values,
    labeled,
    update_values,
)
from fleet_records.errors import NotFoundError
from fleet_records.records import Province, Trip, TripFilters


def _as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(as_text(value))


def _as_time_text(value: Any) -> str:
    parsed = value if isinstance(value, time) else time.fromisoformat(as_text(value).strip())
    if parsed.tzinfo is not None:
        raise ValueError("load time must not carry a UTC offset")
    # Stored as HH:MM or HH:MM:SS so text order is time order.
    return parsed.isoformat(timespec="seconds" if parsed.second else "minutes")


def _as_decimal_text(value: Any) -> str:
    if isinstance(value, bool):
        raise TypeError("expected a decimal amount")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"{value!r} is not a decimal amount") from exc
    if not amount.is_finite():
        raise ValueError(f"{value!r} is not a decimal amount")
    return str(amount)


def _as_province(value: Any) -> str:
    return Province(as_text(value)).value


TRIPS = TripRow.__table__
_c = inspect(TripRow).columns

TRIP_FIELDS = (
    FieldSpec("driver_id", _c.driver_id, required=True, normalize=as_id),
    FieldSpec("container_number", _c.container_number, normalize=as_text),
    FieldSpec("load_date", _c.load_date, normalize=_as_date),
    FieldSpec("load_time", _c.load_time, normalize=_as_time_text),
    FieldSpec("trip_payment", _c.trip_payment, normalize=_as_decimal_text),
    FieldSpec("province", _c.province, normalize=_as_province),
    FieldSpec("product", _c.product, normalize=as_text),
)

TRIP_COLUMNS = labeled(_c, "trip_id", *(f.name for f in TRIP_FIELDS))

# Most recent load first; undated trips sink to the bottom.
_RECENT_FIRST = (
    _c.load_date.desc().nulls_last(),
    _c.load_time.desc().nulls_last(),
    _c.trip_id.desc(),
)


class TripRepo:
    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    async def list_all(self) -> list[Trip]:
        rows = await self._executor.execute(select(*TRIP_COLUMNS).order_by(*_RECENT_FIRST))
        return [Trip.model_validate(r) for r in rows]

    async def list_for_driver(self, driver_id: int) -> list[Trip]:
        stmt = select(*TRIP_COLUMNS).where(_c.driver_id == driver_id).order_by(*_RECENT_FIRST)
        return [Trip.model_validate(r) for r in await self._executor.execute(stmt)]

    async def search(self, filters: TripFilters) -> list[Trip]:
        stmt = select(*TRIP_COLUMNS)
        if filters.province is not None:
            stmt = stmt.where(_c.province == filters.province.value)
        if filters.product:
            stmt = stmt.where(_c.product == filters.product)
        if filters.driver_id is not None:
            stmt = stmt.where(_c.driver_id == filters.driver_id)
        if filters.container_number:
            stmt = stmt.where(
                _c.container_number.icontains(filters.container_number, autoescape=True)
            )
        if filters.load_date_from is not None:
            stmt = stmt.where(_c.load_date >= filters.load_date_from)
        if filters.load_date_to is not None:
            stmt = stmt.where(_c.load_date <= filters.load_date_to)
        # Range filters only; stored amounts stay exact text.
        if filters.trip_payment_min is not None:
            stmt = stmt.where(cast(_c.trip_payment, Float) >= filters.trip_payment_min)
        if filters.trip_payment_max is not None:
            stmt = stmt.where(cast(_c.trip_payment, Float) <= filters.trip_payment_max)
        rows = await self._executor.execute(stmt.order_by(*_RECENT_FIRST))
        return [Trip.model_validate(r) for r in rows]

    async def get(self, trip_id: int) -> Trip:
        rows = await self._executor.execute(
            select(*TRIP_COLUMNS).where(_c.trip_id == trip_id)
        )
        if not rows:
            raise NotFoundError("trip", trip_id)
        return Trip.model_validate(rows[0])

    async def create(self, fields: Mapping[str, Any]) -> Trip:
        values = insert_values(TRIP_FIELDS, fields)
        stmt = insert(TRIPS).values(values).returning(*TRIP_COLUMNS)
        rows = await self._executor.execute(stmt)
        return Trip.model_validate(rows[0])

    async def update(self, trip_id: int, patch: Mapping[str, Any]) -> Trip:
        values = update_values(TRIP_FIELDS, patch)
        stmt = (
            update(TRIPS)
            .where(_c.trip_id == trip_id)
            .values(values)
            .returning(*TRIP_COLUMNS)
        )
        rows = await self._executor.execute(stmt)
        if not rows:
            raise NotFoundError("trip", trip_id)
        return Trip.model_validate(rows[0])

    async def delete(self, trip_id: int) -> int:
        stmt = delete(TRIPS).where(_c.trip_id == trip_id).returning(_c.trip_id)
        return len(await self._executor.execute(stmt))

    async def delete_all(self) -> int:
        stmt = delete(TRIPS).returning(_c.trip_id)
        return len(await self._executor.execute(stmt))
