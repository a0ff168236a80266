"""
fleet_records.api.errors

Translation of domain errors into HTTP responses.

Responsibilities:
- Map the error taxonomy onto status codes the UI collaborator can branch on.
- Keep store failures distinguishable from empty results (503, never `[]`).
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from fleet_records.errors import ConflictError, NotFoundError, QueryError, ValidationError


async def _not_found(_: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "entity": exc.entity, "id": exc.entity_id},
    )


async def _invalid(_: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field},
    )


async def _conflict(_: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_409_CONFLICT,
        content={"detail": str(exc), "kind": exc.kind},
    )


async def _store_failure(_: Request, __: QueryError) -> JSONResponse:
    # Already logged by the executor with the failing statement.
    return JSONResponse(
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "record store unavailable"},
    )


def register_error_handlers(app: FastAPI) -> None:
    # Starlette resolves handlers by MRO, so ConflictError wins over QueryError.
    app.add_exception_handler(NotFoundError, _not_found)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, _invalid)  # type: ignore[arg-type]
    app.add_exception_handler(ConflictError, _conflict)  # type: ignore[arg-type]
    app.add_exception_handler(QueryError, _store_failure)  # type: ignore[arg-type]
