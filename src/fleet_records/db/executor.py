"""
fleet_records.db.executor

Query executor: the single place statements meet the store.

Responsibilities:
- Acquire a pooled connection, run one parameterized statement, return rows as
  label-to-value dicts.
- Offer an explicit transaction scope for multi-statement operations.
- Translate and log store failures (`QueryError`, `ConflictError`).

Statements are SQLAlchemy Core constructs, so values always travel as bound
parameters. No retries happen here; retry policy belongs to callers.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from sqlalchemy.sql import Executable

from fleet_records.errors import ConflictError, ConflictKind, QueryError
from fleet_records.observability.logging import get_logger

log = get_logger(__name__)

Record = dict[str, Any]

# PostgreSQL SQLSTATE codes surfaced by asyncpg/psycopg.
_UNIQUE_SQLSTATE = "23505"
_FOREIGN_KEY_SQLSTATE = "23503"


class QueryExecutor:
    def __init__(
        self,
        engine: AsyncEngine,
        *,
        timeout_s: float | None = None,
        connection: AsyncConnection | None = None,
    ) -> None:
        self._engine = engine
        self._timeout_s = timeout_s
        # Set only on executors handed out by `transaction()`.
        self._connection = connection

    @property
    def in_transaction(self) -> bool:
        return self._connection is not None

    async def execute(
        self, statement: Executable, parameters: Mapping[str, Any] | None = None
    ) -> list[Record]:
        # `parameters` binds the `:name` placeholders of a textual statement.
        try:
            if self._connection is not None:
                return await self._run(self._connection, statement, parameters)
            async with self._engine.begin() as conn:
                return await self._run(conn, statement, parameters)
        except IntegrityError as exc:
            kind = _conflict_kind(exc)
            log.warning(
                "query_conflict",
                kind=kind,
                statement=self._describe(statement),
                error=str(exc.orig),
            )
            raise ConflictError(f"{kind} constraint violated", kind=kind, cause=exc) from exc
        except TimeoutError as exc:
            log.error(
                "query_timeout",
                statement=self._describe(statement),
                timeout_s=self._timeout_s,
            )
            raise QueryError(f"statement exceeded {self._timeout_s}s", cause=exc) from exc
        except (SQLAlchemyError, OSError) as exc:
            log.error(
                "query_failed",
                statement=self._describe(statement),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise QueryError("statement failed", cause=exc) from exc

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[QueryExecutor]:
        """
        Yield an executor whose statements commit or roll back together.

        Nested scopes join the outer transaction.
        """

        if self._connection is not None:
            yield self
            return

        try:
            async with self._engine.begin() as conn:
                yield QueryExecutor(self._engine, timeout_s=self._timeout_s, connection=conn)
        except (SQLAlchemyError, OSError) as exc:
            # Statement failures arrive here already translated; this covers BEGIN/COMMIT.
            log.error("transaction_failed", error=str(exc), error_type=type(exc).__name__)
            raise QueryError("transaction failed", cause=exc) from exc

    async def _run(
        self,
        conn: AsyncConnection,
        statement: Executable,
        parameters: Mapping[str, Any] | None,
    ) -> list[Record]:
        pending = conn.execute(statement, dict(parameters) if parameters else None)
        if self._timeout_s is None:
            result: Result[Any] = await pending
        else:
            result = await asyncio.wait_for(pending, self._timeout_s)
        if not result.returns_rows:
            return []
        return [dict(row) for row in result.mappings().all()]

    def _describe(self, statement: Executable) -> str:
        try:
            return str(statement.compile(dialect=self._engine.dialect))  # type: ignore[attr-defined]
        except SQLAlchemyError:
            return type(statement).__name__


def _conflict_kind(exc: IntegrityError) -> ConflictKind:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _UNIQUE_SQLSTATE:
        return "unique"
    if sqlstate == _FOREIGN_KEY_SQLSTATE:
        return "foreign_key"

    # SQLite only reports the rule in the message text.
    message = str(orig).upper()
    if "UNIQUE" in message:
        return "unique"
    if "FOREIGN KEY" in message:
        return "foreign_key"
    return "integrity"


# --- Module Notes -----------------------------------------------------------
# Failures are logged here exactly once; repositories and services only decide
# whether a translated error is expected (natural-key conflicts) or propagates.
