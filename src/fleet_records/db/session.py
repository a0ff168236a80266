"""
fleet_records.db.session

Async SQLAlchemy engine helpers.

Responsibilities:
- Create the pooled async engine from settings.
- Turn on foreign key enforcement for SQLite connections.
- Create missing tables for dev/test databases.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from fleet_records.db.models import Base
from fleet_records.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    engine = create_async_engine(settings.database_url, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


async def create_tables(engine: AsyncEngine) -> None:
    """
    Bootstrap for dev/test only; existing tables are left as they are.
    Production databases are provisioned outside this service.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    # SQLite ignores REFERENCES clauses unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
