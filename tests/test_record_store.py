"""
Record store CRUD behavior against the in-memory database
"""

import asyncio

import asyncpg
import pytest

from database.errors import (
    ConstraintViolation,
    StoreConnectionError,
    StoreQueryError,
    StoreTimeoutError,
)
from database.record_store import Record, RecordStore, parse_affected_count
from fakes import FakeDatabase, collect


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_then_list_contains_record_once(self, store):
        new_id = await store.create(7, "alice")

        assert new_id == 7
        records = await collect(store)
        assert [r for r in records if r.id == 7] == [Record(id=7, name="alice")]

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_constraint_violation(self, store, fake_database):
        await store.create(1, "original")

        with pytest.raises(ConstraintViolation) as exc_info:
            await store.create(1, "intruder")

        assert exc_info.value.record_id == 1
        assert fake_database.rows == {1: "original"}

    @pytest.mark.asyncio
    async def test_parameters_are_bound_not_interpolated(self, store, fake_database):
        await store.create(2, "x'); DROP TABLE user_info; --")

        query, args, timeout = fake_database.statements[-1]
        assert query == "INSERT INTO user_info (id, name) VALUES ($1, $2) RETURNING id"
        assert args == (2, "x'); DROP TABLE user_info; --")
        assert timeout == 5.0


class TestList:

    @pytest.mark.asyncio
    async def test_lists_in_storage_order(self, store):
        await store.create(3, "c")
        await store.create(1, "a")
        await store.create(2, "b")

        assert [r.id for r in await collect(store)] == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_list_is_lazy_and_restartable(self, store, fake_database):
        await store.create(1, "a")

        scan = store.list_records()
        assert len(fake_database.statements) == 1  # nothing executed yet

        first = [record async for record in scan]
        await store.create(2, "b")
        second = await collect(store)

        assert first == [Record(1, "a")]
        assert second == [Record(1, "a"), Record(2, "b")]

    @pytest.mark.asyncio
    async def test_empty_table(self, store):
        assert await collect(store) == []

    @pytest.mark.asyncio
    async def test_closing_scan_early_releases_connection(self, store, fake_database):
        for record_id in range(5):
            await store.create(record_id, f"user{record_id}")

        scan = store.list_records()
        async for record in scan:
            break
        await scan.aclose()

        assert fake_database.open_connections == 0

    @pytest.mark.asyncio
    async def test_records_are_immutable_copies(self, store, fake_database):
        await store.create(1, "a")
        record = (await collect(store))[0]

        with pytest.raises(AttributeError):
            record.name = "changed"
        assert fake_database.rows[1] == "a"


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_existing_changes_only_name(self, store):
        await store.create(1, "a")
        await store.create(2, "other")

        assert await store.update(1, "b") == 1
        assert await collect(store) == [Record(1, "b"), Record(2, "other")]

    @pytest.mark.asyncio
    async def test_update_missing_returns_zero(self, store, fake_database):
        await store.create(1, "a")

        assert await store.update(99, "ghost") == 0
        assert fake_database.rows == {1: "a"}

    @pytest.mark.asyncio
    async def test_create_update_list_round_trip(self, store):
        await store.create(1, "a")
        await store.update(1, "b")

        assert await collect(store) == [Record(1, "b")]


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_existing(self, store):
        await store.create(1, "a")

        assert await store.delete(1) == 1
        assert await collect(store) == []

    @pytest.mark.asyncio
    async def test_delete_missing_returns_zero(self, store):
        await store.create(1, "a")

        assert await store.delete(2) == 0
        assert await collect(store) == [Record(1, "a")]


@pytest.mark.asyncio
async def test_peter_zhangqi_scenario(store):
    await store.create(3, "peter")
    assert Record(3, "peter") in await collect(store)

    assert await store.update(3, "zhangqi") == 1
    assert Record(3, "zhangqi") in await collect(store)

    assert await store.delete(3) == 1
    assert all(record.id != 3 for record in await collect(store))


class TestFailures:

    @pytest.mark.asyncio
    async def test_unopened_database_raises_connection_error(self):
        store = RecordStore(FakeDatabase(), timeout=1.0)

        with pytest.raises(StoreConnectionError):
            await store.create(1, "a")

    @pytest.mark.asyncio
    async def test_dropped_connection_raises_connection_error(self, store, fake_database):
        fake_database.fail_with = ConnectionResetError("connection reset by peer")

        with pytest.raises(StoreConnectionError):
            await store.update(1, "a")

    @pytest.mark.asyncio
    async def test_timeout_raises_timeout_error(self, store, fake_database):
        fake_database.fail_with = asyncio.TimeoutError()

        with pytest.raises(StoreTimeoutError):
            await store.delete(1)

    @pytest.mark.asyncio
    async def test_timeout_is_a_connection_error(self, store, fake_database):
        fake_database.fail_with = asyncio.TimeoutError()

        with pytest.raises(StoreConnectionError):
            await store.ping()

    @pytest.mark.asyncio
    async def test_missing_table_raises_query_error(self, store, fake_database):
        fake_database.fail_with = asyncpg.UndefinedTableError('relation "user_info" does not exist')

        with pytest.raises(StoreQueryError):
            await collect(store)

    def test_rejects_unsafe_table_name(self):
        with pytest.raises(ValueError):
            RecordStore(FakeDatabase(), table="users; DROP TABLE users")

    def test_accepts_schema_qualified_table(self):
        assert RecordStore(FakeDatabase(), table="public.user_info").table == "public.user_info"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            RecordStore(FakeDatabase(), timeout=0)


@pytest.mark.parametrize("status,expected", [
    ("UPDATE 1", 1),
    ("DELETE 0", 0),
    ("", 0),
    (None, 0),
])
def test_parse_affected_count(status, expected):
    assert parse_affected_count(status) == expected


def test_malformed_status_is_logged(caplog):
    with caplog.at_level("WARNING", logger="database.record_store"):
        assert parse_affected_count("UPDATE") == 0

    assert "Unrecognized command status" in caplog.text
