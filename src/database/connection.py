"""
Database connection and pool management
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg

from database.errors import StoreConnectionError, StoreTimeoutError

logger = logging.getLogger(__name__)

# Errors that mean the database could not be reached or authenticated to
CONNECTION_ERRORS = (
    OSError,
    asyncpg.InterfaceError,
    asyncpg.PostgresConnectionError,
    asyncpg.InvalidAuthorizationSpecificationError,
    asyncpg.CannotConnectNowError,
)


class Database:
    """Owns the asyncpg pool; opened at startup and closed at shutdown"""

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        command_timeout: float = 10.0
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: Optional[asyncpg.Pool] = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Initialize database connection pool"""
        if self._pool is not None:
            return

        try:
            pool = await asyncio.wait_for(
                asyncpg.create_pool(
                    self.dsn,
                    min_size=self.min_size,
                    max_size=self.max_size,
                    command_timeout=self.command_timeout,
                    statement_cache_size=0  # pgbouncer compatibility
                ),
                timeout=self.command_timeout
            )
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(f"Timed out connecting to database after {self.command_timeout}s") from e
        except (CONNECTION_ERRORS + (asyncpg.PostgresError,)) as e:
            # Server-side refusals (unknown database, too many clients) included
            raise StoreConnectionError(f"Cannot connect to database: {e}") from e

        # Test connection
        try:
            async with pool.acquire() as conn:
                await conn.fetchval("SELECT 1", timeout=self.command_timeout)
        except asyncio.TimeoutError as e:
            await pool.close()
            raise StoreTimeoutError(f"Timed out checking database connection after {self.command_timeout}s") from e
        except (CONNECTION_ERRORS + (asyncpg.PostgresError,)) as e:
            await pool.close()
            raise StoreConnectionError(f"Database connection check failed: {e}") from e
        except Exception:
            await pool.close()
            raise

        self._pool = pool
        logger.info(f"Database initialized successfully (pool {self.min_size}-{self.max_size})")

    async def close(self) -> None:
        """Close database connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def acquire(self):
        """Borrow a connection from the pool for one operation"""
        if self._pool is None:
            raise StoreConnectionError("Database pool not initialized")

        try:
            conn = await self._pool.acquire(timeout=self.command_timeout)
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError("Timed out waiting for a database connection") from e
        except (CONNECTION_ERRORS + (asyncpg.PostgresError,)) as e:
            raise StoreConnectionError(f"Cannot acquire database connection: {e}") from e

        try:
            yield conn
        finally:
            await self._pool.release(conn)
