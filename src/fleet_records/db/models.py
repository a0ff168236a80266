"""
fleet_records.db.models

Relational schema for drivers, vehicles and trips.

Responsibilities:
- Declarative base and the three tables with their keys.
- Carry the store-level guards the services rely on:
  - `drivers.identification_number` is unique (natural key)
  - `vehicles.driver_id` is unique (a driver operates at most one vehicle)
  - `trips.driver_id` is a required reference to drivers
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, MetaData, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    # Named constraints show up verbatim in store error messages and logs.
    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s",
        }
    )


class Driver(Base):
    __tablename__ = "drivers"

    driver_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(256), nullable=False)
    identification_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    phone_number: Mapped[str] = mapped_column(String(64), nullable=False)
    operative_license: Mapped[str | None] = mapped_column(Text, nullable=True)


class Vehicle(Base):
    __tablename__ = "vehicles"

    vehicle_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # Tractor ("cuña") and trailer ("plancha") units each carry their own numbers.
    cuna_circulation_number: Mapped[str | None] = mapped_column(
        "cuña_circulation_number", String(64), nullable=True
    )
    plancha_circulation_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    cuna_plate_number: Mapped[str | None] = mapped_column(
        "cuña_plate_number", String(64), nullable=True
    )
    plancha_plate_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    driver_id: Mapped[int | None] = mapped_column(
        ForeignKey("drivers.driver_id"), nullable=True, unique=True
    )


class Trip(Base):
    __tablename__ = "trips"

    trip_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    driver_id: Mapped[int] = mapped_column(ForeignKey("drivers.driver_id"), nullable=False)
    container_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    load_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    load_time: Mapped[str | None] = mapped_column(String(8), nullable=True)
    # Decimal text; never a float column.
    trip_payment: Mapped[str | None] = mapped_column(String(32), nullable=True)
    province: Mapped[str | None] = mapped_column(String(64), nullable=True)
    product: Mapped[str | None] = mapped_column(String(128), nullable=True)

    __table_args__ = (Index("ix_trips_driver_loaded", "driver_id", "load_date", "load_time"),)


# --- Module Notes -----------------------------------------------------------
# No ON DELETE cascades: removing parents before children is the job of
# `services.lifecycle` and `services.relationships.delete_driver`.
