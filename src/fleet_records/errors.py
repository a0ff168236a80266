"""
fleet_records.errors

Error taxonomy shared by the executor, repositories and services.

Responsibilities:
- Distinguish caller mistakes (validation), store conflicts, missing rows and
  opaque store failures so callers can react to each.
"""

from __future__ import annotations

from typing import Literal

ConflictKind = Literal["unique", "foreign_key", "integrity"]


class FleetRecordsError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(FleetRecordsError):
    """A required field is missing or a field value is not acceptable."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NoFieldsError(ValidationError):
    """An update patch carried no recognised, settable field."""


class NotFoundError(FleetRecordsError):
    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class QueryError(FleetRecordsError):
    """The store rejected a statement or could not be reached."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConflictError(QueryError):
    """
    A store integrity rule was violated.

    `kind` tells uniqueness violations (natural key, one vehicle per driver)
    apart from broken references.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ConflictKind = "integrity",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.kind = kind
