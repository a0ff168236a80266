"""
tests.conftest

Shared fixtures: a temp-file SQLite database per test, the executor bound to it,
and repositories over that executor.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.repositories.drivers import DRIVERS, DriverRepo
from fleet_records.db.repositories.trips import TRIPS, TripRepo
from fleet_records.db.repositories.vehicles import VEHICLES, VehicleRepo
from fleet_records.db.session import create_engine, create_tables
from fleet_records.records import Driver
from fleet_records.settings import Settings


def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'fleet.db'}"


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    eng = create_engine(Settings(env="test", database_url=sqlite_url(tmp_path)))
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def executor(engine: AsyncEngine) -> QueryExecutor:
    return QueryExecutor(engine, timeout_s=10)


@pytest.fixture
def drivers(executor: QueryExecutor) -> DriverRepo:
    return DriverRepo(executor)


@pytest.fixture
def vehicles(executor: QueryExecutor) -> VehicleRepo:
    return VehicleRepo(executor)


@pytest.fixture
def trips(executor: QueryExecutor) -> TripRepo:
    return TripRepo(executor)


@pytest.fixture
def counts(executor: QueryExecutor):
    """Row counts per table, read straight from the store."""

    async def _counts() -> dict[str, int]:
        out: dict[str, int] = {}
        for name, table in (("drivers", DRIVERS), ("vehicles", VEHICLES), ("trips", TRIPS)):
            rows = await executor.execute(select(func.count().label("n")).select_from(table))
            out[name] = rows[0]["n"]
        return out

    return _counts


async def make_driver(
    drivers: DriverRepo, identification_number: str = "D1", **overrides: str
) -> Driver:
    fields = {
        "full_name": "Ana Ruiz",
        "identification_number": identification_number,
        "phone_number": "+1",
        **overrides,
    }
    return await drivers.create(fields)
