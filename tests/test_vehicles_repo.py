from __future__ import annotations

import pytest

from fleet_records.db.repositories.drivers import DriverRepo
from fleet_records.db.repositories.vehicles import VehicleRepo
from fleet_records.errors import ConflictError, NoFieldsError, NotFoundError, ValidationError

from conftest import make_driver


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {},
        {"cuna_plate_number": "  "},
        {"driver_id": 1},
    ],
)
async def test_vehicle_needs_an_identifier(vehicles: VehicleRepo, counts, fields: dict) -> None:
    with pytest.raises(ValidationError):
        await vehicles.create(fields)
    assert (await counts())["vehicles"] == 0


@pytest.mark.asyncio
async def test_create_accepts_wire_and_attribute_names_for_reads(vehicles: VehicleRepo) -> None:
    vehicle = await vehicles.create({"cuna_plate_number": "ABC-1"})

    assert vehicle.cuna_plate_number == "ABC-1"
    assert vehicle.driver_id is None
    wire = vehicle.model_dump(by_alias=True)
    assert wire["cuña_plate_number"] == "ABC-1"
    assert wire["plancha_plate_number"] is None


@pytest.mark.asyncio
async def test_joined_read_embeds_assigned_driver(
    vehicles: VehicleRepo, drivers: DriverRepo
) -> None:
    driver = await make_driver(drivers)
    assigned = await vehicles.create(
        {"plancha_circulation_number": "PC-7", "driver_id": driver.driver_id}
    )
    loose = await vehicles.create({"cuna_circulation_number": "CC-1"})

    fetched = await vehicles.get(assigned.vehicle_id)
    assert fetched.vehicle_id == assigned.vehicle_id
    assert fetched.driver_id == driver.driver_id
    assert fetched.driver == driver

    unassigned = await vehicles.get(loose.vehicle_id)
    assert unassigned.driver is None

    listed = {v.vehicle_id: v for v in await vehicles.list_all()}
    assert listed[assigned.vehicle_id].driver == driver
    assert listed[loose.vehicle_id].driver is None


@pytest.mark.asyncio
async def test_one_vehicle_per_driver(vehicles: VehicleRepo, drivers: DriverRepo) -> None:
    driver = await make_driver(drivers)
    await vehicles.create({"cuna_plate_number": "A", "driver_id": driver.driver_id})

    with pytest.raises(ConflictError) as ei:
        await vehicles.create({"cuna_plate_number": "B", "driver_id": driver.driver_id})
    assert ei.value.kind == "unique"


@pytest.mark.asyncio
async def test_unknown_driver_is_a_foreign_key_conflict(vehicles: VehicleRepo) -> None:
    with pytest.raises(ConflictError) as ei:
        await vehicles.create({"cuna_plate_number": "A", "driver_id": 999})
    assert ei.value.kind == "foreign_key"


@pytest.mark.asyncio
async def test_get_for_driver(vehicles: VehicleRepo, drivers: DriverRepo) -> None:
    driver = await make_driver(drivers, "D1")
    idle = await make_driver(drivers, "D2")
    await vehicles.create({"cuna_circulation_number": "X"})
    vehicle = await vehicles.create({"plancha_plate_number": "P-1", "driver_id": driver.driver_id})

    found = await vehicles.get_for_driver(driver.driver_id)
    assert found is not None
    assert found.vehicle_id == vehicle.vehicle_id
    assert found.driver == driver

    assert await vehicles.get_for_driver(idle.driver_id) is None


@pytest.mark.asyncio
async def test_update_assigns_driver_and_returns_joined_vehicle(
    vehicles: VehicleRepo, drivers: DriverRepo
) -> None:
    driver = await make_driver(drivers)
    vehicle = await vehicles.create({"cuna_plate_number": "A"})

    updated = await vehicles.update(vehicle.vehicle_id, {"driver_id": driver.driver_id})

    assert updated.driver == driver
    assert updated.cuna_plate_number == "A"


@pytest.mark.asyncio
async def test_update_rejects_empty_patch(vehicles: VehicleRepo) -> None:
    vehicle = await vehicles.create({"cuna_plate_number": "A"})
    with pytest.raises(NoFieldsError):
        await vehicles.update(vehicle.vehicle_id, {"vehicle_id": 9})


@pytest.mark.asyncio
async def test_update_missing_vehicle_is_not_found(vehicles: VehicleRepo) -> None:
    with pytest.raises(NotFoundError):
        await vehicles.update(5, {"cuna_plate_number": "B"})


@pytest.mark.asyncio
async def test_unassign_and_delete(vehicles: VehicleRepo, drivers: DriverRepo) -> None:
    driver = await make_driver(drivers)
    vehicle = await vehicles.create({"cuna_plate_number": "A", "driver_id": driver.driver_id})

    assert await vehicles.unassign_driver(driver.driver_id) == 1
    assert (await vehicles.get(vehicle.vehicle_id)).driver_id is None

    assert await vehicles.delete(vehicle.vehicle_id) == 1
    assert await vehicles.delete(vehicle.vehicle_id) == 0


@pytest.mark.asyncio
async def test_list_all_search_over_identifiers(vehicles: VehicleRepo) -> None:
    await vehicles.create({"cuna_plate_number": "HAB-100"})
    await vehicles.create({"plancha_circulation_number": "MTZ-200"})

    found = await vehicles.list_all(q="mtz")
    assert [v.plancha_circulation_number for v in found] == ["MTZ-200"]


@pytest.mark.asyncio
async def test_wire_field_names_are_accepted_on_create_and_update(vehicles: VehicleRepo) -> None:
    vehicle = await vehicles.create({"cuña_circulation_number": "CC-9"})
    assert vehicle.cuna_circulation_number == "CC-9"

    updated = await vehicles.update(vehicle.vehicle_id, {"cuña_plate_number": "X-1"})
    assert updated.cuna_plate_number == "X-1"
    assert updated.cuna_circulation_number == "CC-9"
