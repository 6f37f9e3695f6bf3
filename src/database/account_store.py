"""
Account store: credential lookup in the accounts table
"""

import logging
from typing import Optional

from database.record_store import TableStore

logger = logging.getLogger(__name__)


class AccountStore(TableStore):
    """Read-only access to the accounts table (user_name, password)"""

    def __init__(self, database, table: str = "tb_user", timeout: float = 10.0):
        super().__init__(database, table, timeout)

    async def find_password(self, user_name: str) -> Optional[str]:
        """Stored password for ``user_name``, or None when there is no such account"""
        query = f"SELECT password FROM {self.table} WHERE user_name = $1"
        logger.debug(f"Executing SELECT: {query} params=[{user_name!r}]")

        async with self._round_trip("SELECT"):
            async with self.database.acquire() as conn:
                password = await conn.fetchval(query, user_name, timeout=self.timeout)

        if password is None:
            logger.info(f"No account {user_name!r} in {self.table}")
        return password
