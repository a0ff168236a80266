"""
fleet_records.records

Typed records returned by repositories and services.

Responsibilities:
- Define the driver / vehicle / trip shapes shared by storage and the wire.
- Define the aggregate read shapes (driver detail, trip detail).
- Hold the fixed province enumeration used to validate trips.

Vehicle identifier fields use ASCII attribute names and serialise under the
`cuña_*` / `plancha_*` wire names through aliases.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class Province(enum.StrEnum):
    # Fifteen provinces plus the special municipality; values are the stored text.
    pinar_del_rio = "Pinar del Río"
    artemisa = "Artemisa"
    la_habana = "La Habana"
    mayabeque = "Mayabeque"
    matanzas = "Matanzas"
    cienfuegos = "Cienfuegos"
    villa_clara = "Villa Clara"
    sancti_spiritus = "Sancti Spíritus"
    ciego_de_avila = "Ciego de Ávila"
    camaguey = "Camagüey"
    las_tunas = "Las Tunas"
    granma = "Granma"
    holguin = "Holguín"
    santiago_de_cuba = "Santiago de Cuba"
    guantanamo = "Guantánamo"
    isla_de_la_juventud = "Isla de la Juventud"


class Driver(BaseModel):
    driver_id: int
    full_name: str
    identification_number: str
    phone_number: str
    operative_license: str | None = None


class Vehicle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vehicle_id: int
    cuna_circulation_number: str | None = Field(default=None, alias="cuña_circulation_number")
    plancha_circulation_number: str | None = None
    cuna_plate_number: str | None = Field(default=None, alias="cuña_plate_number")
    plancha_plate_number: str | None = None
    driver_id: int | None = None
    # Populated on joined reads when the vehicle has an assigned driver.
    driver: Driver | None = None


class Trip(BaseModel):
    trip_id: int
    driver_id: int
    container_number: str | None = None
    load_date: date | None = None
    load_time: str | None = None
    trip_payment: str | None = None
    province: str | None = None
    product: str | None = None


class DriverDetail(BaseModel):
    driver: Driver
    vehicle: Vehicle | None = None
    trips: list[Trip] = Field(default_factory=list)


class TripDetail(BaseModel):
    trip: Trip
    driver: Driver | None = None
    vehicle: Vehicle | None = None


class TripFilters(BaseModel):
    province: Province | None = None
    product: str | None = None
    driver_id: int | None = None
    container_number: str | None = None
    load_date_from: date | None = None
    load_date_to: date | None = None
    trip_payment_min: float | None = None
    trip_payment_max: float | None = None


@dataclass(frozen=True, slots=True)
class DriverCreation:
    driver: Driver
    vehicle: Vehicle | None
    # False when the natural key matched an existing driver.
    created: bool


@dataclass(frozen=True, slots=True)
class WipeReport:
    trips: int
    vehicles: int
    drivers: int
