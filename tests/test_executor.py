from __future__ import annotations

import pytest
from sqlalchemy import insert, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from fleet_records.db.executor import QueryExecutor
from fleet_records.db.repositories.drivers import DRIVERS
from fleet_records.db.repositories.trips import TRIPS
from fleet_records.errors import ConflictError, QueryError


def _driver_insert(identification_number: str):
    return (
        insert(DRIVERS)
        .values(full_name="Luis Pérez", identification_number=identification_number, phone_number="555")
        .returning(DRIVERS.c.driver_id)
    )


@pytest.mark.asyncio
async def test_execute_returns_records_keyed_by_label(executor: QueryExecutor) -> None:
    created = await executor.execute(_driver_insert("X1"))
    assert len(created) == 1
    driver_id = created[0]["driver_id"]

    rows = await executor.execute(
        select(DRIVERS.c.full_name.label("name")).where(DRIVERS.c.driver_id == driver_id)
    )
    assert rows == [{"name": "Luis Pérez"}]


@pytest.mark.asyncio
async def test_statements_without_rows_return_empty_list(executor: QueryExecutor) -> None:
    assert await executor.execute(DRIVERS.delete()) == []


@pytest.mark.asyncio
async def test_unique_violation_becomes_conflict(executor: QueryExecutor) -> None:
    await executor.execute(_driver_insert("X1"))
    with pytest.raises(ConflictError) as ei:
        await executor.execute(_driver_insert("X1"))

    assert ei.value.kind == "unique"
    assert isinstance(ei.value, QueryError)
    assert isinstance(ei.value.cause, IntegrityError)


@pytest.mark.asyncio
async def test_foreign_key_violation_is_enforced(executor: QueryExecutor) -> None:
    with pytest.raises(ConflictError) as ei:
        await executor.execute(insert(TRIPS).values(driver_id=999))
    assert ei.value.kind == "foreign_key"


@pytest.mark.asyncio
async def test_invalid_statement_raises_query_error(executor: QueryExecutor) -> None:
    with pytest.raises(QueryError) as ei:
        await executor.execute(text("SELEC 1"))

    assert not isinstance(ei.value, ConflictError)
    assert isinstance(ei.value.__cause__, SQLAlchemyError)


@pytest.mark.asyncio
async def test_transaction_rolls_back_every_statement(executor: QueryExecutor) -> None:
    with pytest.raises(ConflictError):
        async with executor.transaction() as tx:
            await tx.execute(_driver_insert("T1"))
            await tx.execute(_driver_insert("T1"))

    assert await executor.execute(select(DRIVERS.c.driver_id)) == []


@pytest.mark.asyncio
async def test_transaction_commits_on_success(executor: QueryExecutor) -> None:
    async with executor.transaction() as tx:
        assert tx.in_transaction
        await tx.execute(_driver_insert("T1"))
        await tx.execute(_driver_insert("T2"))

    rows = await executor.execute(select(DRIVERS.c.identification_number.label("ident")))
    assert sorted(r["ident"] for r in rows) == ["T1", "T2"]


@pytest.mark.asyncio
async def test_nested_transaction_joins_outer(executor: QueryExecutor) -> None:
    async with executor.transaction() as outer:
        async with outer.transaction() as inner:
            assert inner is outer


@pytest.mark.asyncio
async def test_textual_statement_binds_parameters(executor: QueryExecutor) -> None:
    await executor.execute(_driver_insert("P1"))
    rows = await executor.execute(
        text("SELECT identification_number AS ident FROM drivers WHERE identification_number = :ident"),
        {"ident": "P1"},
    )
    assert rows == [{"ident": "P1"}]

    # A value that looks like SQL is only ever data.
    assert await executor.execute(
        text("SELECT driver_id FROM drivers WHERE identification_number = :ident"),
        {"ident": "P1' OR '1'='1"},
    ) == []
