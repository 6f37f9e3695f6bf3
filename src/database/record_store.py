"""
Record store: CRUD access to the user records table
"""

import asyncio
import logging
import re
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import asyncpg

from database.connection import CONNECTION_ERRORS
from database.errors import (
    RecordStoreError,
    StoreConnectionError,
    StoreTimeoutError,
    ConstraintViolation,
    StoreQueryError,
)

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


@dataclass(frozen=True)
class Record:
    """One row of the user table"""
    id: int
    name: str


def parse_affected_count(status: str) -> int:
    """Row count from an asyncpg command status such as 'UPDATE 1'"""
    if not status:
        logger.warning("Empty command status from database, assuming 0 rows affected")
        return 0
    try:
        return int(status.split()[-1])
    except ValueError:
        logger.warning(f"Unrecognized command status {status!r}, assuming 0 rows affected")
        return 0


class TableStore:
    """
    Base for stores bound to one table.

    A store is handed an open database handle (anything with an async
    ``acquire()`` context manager yielding an asyncpg connection) and does
    not own its lifecycle. Every call is one round trip bounded by
    ``timeout`` seconds; failures are raised as ``RecordStoreError``
    subclasses and never terminate the process.
    """

    def __init__(self, database, table: str, timeout: float = 10.0):
        if not _IDENTIFIER.match(table):
            raise ValueError(f"Invalid table name: {table!r}")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self.database = database
        self.table = table
        self.timeout = timeout

    @asynccontextmanager
    async def _round_trip(self, operation: str, record_id=None):
        """Translate driver errors raised inside one round trip"""
        try:
            yield
        except RecordStoreError:
            raise
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"{operation} on {self.table} rejected, duplicate id {record_id}: {e}")
            raise ConstraintViolation(f"Record with id {record_id} already exists", record_id=record_id) from e
        except asyncio.TimeoutError as e:
            logger.error(f"{operation} on {self.table} timed out after {self.timeout}s")
            raise StoreTimeoutError(f"{operation} timed out after {self.timeout}s") from e
        except ValueError as e:
            # asyncpg.DataError: parameters the server cannot accept
            logger.error(f"{operation} on {self.table} rejected parameters: {e}")
            raise StoreQueryError(f"{operation} failed: {e}") from e
        except CONNECTION_ERRORS as e:
            logger.error(f"{operation} on {self.table} lost the database connection: {e}")
            raise StoreConnectionError(f"{operation} failed: {e}") from e
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during {operation} on {self.table}: {e}")
            raise StoreQueryError(f"{operation} failed: {e}") from e


class RecordStore(TableStore):
    """Create, list, update and delete user records"""

    def __init__(self, database, table: str = "user_info", timeout: float = 10.0):
        super().__init__(database, table, timeout)

    async def create(self, record_id: int, name: str) -> int:
        """Insert a new record and return its id"""
        query = f"INSERT INTO {self.table} (id, name) VALUES ($1, $2) RETURNING id"
        logger.debug(f"Executing INSERT: {query} params=[{record_id}, {name!r}]")

        async with self._round_trip("INSERT", record_id):
            async with self.database.acquire() as conn:
                new_id = await conn.fetchval(query, record_id, name, timeout=self.timeout)

        logger.info(f"Inserted record {new_id} into {self.table}")
        return new_id

    async def list_records(self) -> AsyncIterator[Record]:
        """
        Lazily yield every record in storage order.

        Each call runs a fresh scan through a server-side cursor; the
        connection is held until iteration finishes or the generator is
        closed.
        """
        query = f"SELECT id, name FROM {self.table}"
        logger.debug(f"Executing SELECT: {query}")

        async with self._round_trip("SELECT"):
            async with self.database.acquire() as conn:
                async with conn.transaction():
                    async for row in conn.cursor(query, timeout=self.timeout):
                        yield Record(id=row["id"], name=row["name"])

    async def update(self, record_id: int, name: str) -> int:
        """Rename a record; returns the affected-count (0 when the id does not exist)"""
        query = f"UPDATE {self.table} SET name = $1 WHERE id = $2"
        logger.debug(f"Executing UPDATE: {query} params=[{name!r}, {record_id}]")

        async with self._round_trip("UPDATE", record_id):
            async with self.database.acquire() as conn:
                status = await conn.execute(query, name, record_id, timeout=self.timeout)

        affected = parse_affected_count(status)
        logger.info(f"Updated record {record_id} in {self.table}: {affected} row(s) affected")
        return affected

    async def delete(self, record_id: int) -> int:
        """Remove a record; returns the affected-count (0 when the id does not exist)"""
        query = f"DELETE FROM {self.table} WHERE id = $1"
        logger.debug(f"Executing DELETE: {query} params=[{record_id}]")

        async with self._round_trip("DELETE", record_id):
            async with self.database.acquire() as conn:
                status = await conn.execute(query, record_id, timeout=self.timeout)

        affected = parse_affected_count(status)
        logger.info(f"Deleted record {record_id} from {self.table}: {affected} row(s) affected")
        return affected

    async def ping(self) -> None:
        """Check the database answers a trivial query"""
        async with self._round_trip("PING"):
            async with self.database.acquire() as conn:
                await conn.fetchval("SELECT 1", timeout=self.timeout)
