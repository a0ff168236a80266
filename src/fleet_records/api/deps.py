"""
fleet_records.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, the executor, repositories and
  services.
- Encapsulate app.state access patterns (executor, shared HTTP client).
"""

from __future__ import annotations

from fastapi import Depends, Request

from fleet_records.account_clients.storage_usage import StorageUsageClient
from fleet_records.db.executor import QueryExecutor
from fleet_records.db.repositories.drivers import DriverRepo
from fleet_records.db.repositories.trips import TripRepo
from fleet_records.db.repositories.vehicles import VehicleRepo
from fleet_records.services.lifecycle import LifecycleService
from fleet_records.services.relationships import RelationshipOrchestrator
from fleet_records.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def executor_dep(request: Request) -> QueryExecutor:
    # Created on app startup in `fleet_records.api.app.create_app`.
    return request.app.state.executor  # type: ignore[attr-defined]


def driver_repo(executor: QueryExecutor = Depends(executor_dep)) -> DriverRepo:
    return DriverRepo(executor)


def vehicle_repo(executor: QueryExecutor = Depends(executor_dep)) -> VehicleRepo:
    return VehicleRepo(executor)


def trip_repo(executor: QueryExecutor = Depends(executor_dep)) -> TripRepo:
    return TripRepo(executor)


def orchestrator_dep(executor: QueryExecutor = Depends(executor_dep)) -> RelationshipOrchestrator:
    return RelationshipOrchestrator(executor)


def lifecycle_dep(executor: QueryExecutor = Depends(executor_dep)) -> LifecycleService:
    return LifecycleService(executor)


def storage_client_dep(
    request: Request, settings: Settings = Depends(settings_dep)
) -> StorageUsageClient:
    return StorageUsageClient(settings=settings, http=request.app.state.http)  # type: ignore[attr-defined]
