"""
fleet_records.api.schemas

Request bodies shared by several routers.

Responsibilities:
- Describe the driver and vehicle payloads the UI sends on create/patch.
- Accept vehicle identifiers under their wire names (`cuña_*`).
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from fleet_records.records import Driver, Province, Vehicle


class DriverFields(BaseModel):
    full_name: str = Field(min_length=1, max_length=256)
    identification_number: str = Field(min_length=1, max_length=64)
    phone_number: str = Field(min_length=1, max_length=64)
    operative_license: str | None = None


class DriverPatch(BaseModel):
    full_name: str | None = Field(default=None, max_length=256)
    identification_number: str | None = Field(default=None, max_length=64)
    phone_number: str | None = Field(default=None, max_length=64)
    operative_license: str | None = None


class VehicleFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cuna_circulation_number: str | None = Field(
        default=None, alias="cuña_circulation_number", max_length=64
    )
    plancha_circulation_number: str | None = Field(default=None, max_length=64)
    cuna_plate_number: str | None = Field(default=None, alias="cuña_plate_number", max_length=64)
    plancha_plate_number: str | None = Field(default=None, max_length=64)


class VehiclePatch(VehicleFields):
    driver_id: int | None = None


class TripFields(BaseModel):
    driver_id: int
    container_number: str | None = Field(default=None, max_length=64)
    load_date: date | None = None
    load_time: str | None = None
    # Text keeps the amount exact; numbers are accepted and converted.
    trip_payment: str | int | float | None = None
    province: Province | None = None
    product: str | None = Field(default=None, max_length=128)


class TripPatch(BaseModel):
    driver_id: int | None = None
    container_number: str | None = Field(default=None, max_length=64)
    load_date: date | None = None
    load_time: str | None = None
    trip_payment: str | int | float | None = None
    province: Province | None = None
    product: str | None = Field(default=None, max_length=128)


class DriverCreateResponse(BaseModel):
    driver: Driver
    vehicle: Vehicle | None = None
    created: bool
