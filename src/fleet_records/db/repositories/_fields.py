"""
fleet_records.db.repositories._fields

Whitelisted field handling shared by the repositories.

Responsibilities:
- Map recognised input field names to columns in a fixed order.
- Apply per-field normalisation and required-field checks.
- Build labeled column lists so result dicts use stable keys.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Column
from sqlalchemy.sql.elements import Label

from fleet_records.errors import NoFieldsError, ValidationError


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    column: Column[Any]
    required: bool = False
    normalize: Callable[[Any], Any] | None = None
    # Other input keys accepted for this field, e.g. the `cuña_*` wire names.
    aliases: tuple[str, ...] = ()

    def key_in(self, fields: Mapping[str, Any]) -> str | None:
        for key in (self.name, *self.aliases):
            if key in fields:
                return key
        return None


def labeled(
    columns: Mapping[str, Column[Any]], *names: str, prefix: str = ""
) -> tuple[Label[Any], ...]:
    # Labels carry the record field names, which differ from some column names.
    return tuple(columns[name].label(f"{prefix}{name}") for name in names)


def insert_values(
    specs: Iterable[FieldSpec], fields: Mapping[str, Any]
) -> dict[Column[Any], Any]:
    values: dict[Column[Any], Any] = {}
    for spec in specs:
        key = spec.key_in(fields)
        value = _clean(spec, fields[key] if key is not None else None)
        if value is None:
            if spec.required:
                raise ValidationError(f"{spec.name} is required", field=spec.name)
            # Omitted optional columns fall back to the store default (NULL).
            continue
        values[spec.column] = value
    return values


def update_values(
    specs: Iterable[FieldSpec], patch: Mapping[str, Any]
) -> dict[Column[Any], Any]:
    values: dict[Column[Any], Any] = {}
    for spec in specs:
        key = spec.key_in(patch)
        if key is None:
            continue
        value = _clean(spec, patch[key])
        if value is None and spec.required:
            raise ValidationError(f"{spec.name} cannot be cleared", field=spec.name)
        values[spec.column] = value
    if not values:
        raise NoFieldsError("no fields to update")
    return values


def _clean(spec: FieldSpec, value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    if value is None or spec.normalize is None:
        return value
    try:
        return spec.normalize(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"invalid {spec.name}: {exc}", field=spec.name) from exc


def as_text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value


def as_id(value: Any) -> int:
    # bool is an int subclass; a flag is never a valid id.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise TypeError(f"expected an integer id, got {value!r}")
    return int(value)
