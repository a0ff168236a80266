"""
fleet_records.services.lifecycle

Lifecycle operations spanning every table.

Responsibilities:
- Wipe all records in dependency order (trips, vehicles, drivers) inside one
  transaction, so a failure at any step leaves every table untouched.
"""

from __future__ import annotations

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.repositories.drivers import DriverRepo
from fleet_records.db.repositories.trips import TripRepo
from fleet_records.db.repositories.vehicles import VehicleRepo
from fleet_records.observability.logging import get_logger
from fleet_records.records import WipeReport

log = get_logger(__name__)


class LifecycleService:
    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    async def wipe_all(self) -> WipeReport:
        async with self._executor.transaction() as tx:
            # Children before parents: trips and vehicles both reference drivers.
            trips = await TripRepo(tx).delete_all()
            vehicles = await VehicleRepo(tx).delete_all()
            drivers = await DriverRepo(tx).delete_all()

        report = WipeReport(trips=trips, vehicles=vehicles, drivers=drivers)
        log.warning("wipe_completed", trips=trips, vehicles=vehicles, drivers=drivers)
        return report
