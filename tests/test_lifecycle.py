from __future__ import annotations

import pytest

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.repositories.drivers import DriverRepo
from fleet_records.db.repositories.trips import TripRepo
from fleet_records.db.repositories.vehicles import VehicleRepo
from fleet_records.errors import QueryError
from fleet_records.records import WipeReport
from fleet_records.services.lifecycle import LifecycleService

from conftest import make_driver


async def _seed(drivers: DriverRepo, vehicles: VehicleRepo, trips: TripRepo) -> None:
    for ident in ("D1", "D2"):
        driver = await make_driver(drivers, ident)
        await vehicles.create({"cuna_plate_number": f"P-{ident}", "driver_id": driver.driver_id})
        await trips.create({"driver_id": driver.driver_id, "product": "arroz"})
    await trips.create({"driver_id": driver.driver_id, "product": "frijol"})


@pytest.mark.asyncio
async def test_wipe_removes_everything(
    executor: QueryExecutor, drivers: DriverRepo, vehicles: VehicleRepo, trips: TripRepo, counts
) -> None:
    await _seed(drivers, vehicles, trips)

    report = await LifecycleService(executor).wipe_all()

    assert report == WipeReport(trips=3, vehicles=2, drivers=2)
    assert await counts() == {"drivers": 0, "vehicles": 0, "trips": 0}


@pytest.mark.asyncio
async def test_wipe_on_empty_store(executor: QueryExecutor) -> None:
    assert await LifecycleService(executor).wipe_all() == WipeReport(trips=0, vehicles=0, drivers=0)


@pytest.mark.asyncio
async def test_failed_wipe_leaves_every_table_untouched(
    executor: QueryExecutor,
    drivers: DriverRepo,
    vehicles: VehicleRepo,
    trips: TripRepo,
    counts,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    await _seed(drivers, vehicles, trips)

    async def _boom(self: DriverRepo) -> int:
        raise QueryError("store went away")

    monkeypatch.setattr(DriverRepo, "delete_all", _boom)

    with pytest.raises(QueryError):
        await LifecycleService(executor).wipe_all()

    assert await counts() == {"drivers": 2, "vehicles": 2, "trips": 3}
