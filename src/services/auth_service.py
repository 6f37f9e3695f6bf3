"""
Auth service - username/password checks against the accounts table
"""

import hmac
import logging

from database.account_store import AccountStore
from database.errors import RecordStoreError
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """Service for login checks"""

    def __init__(self, store: AccountStore):
        super().__init__("accounts")
        self.store = store

    async def check_login(self, username: str, password: str) -> ServiceResult:
        """
        Check a username/password pair

        Returns:
            ServiceResult whose data holds ``authenticated``; an unknown user
            and a wrong password both come back as not authenticated
        """
        try:
            stored = await self.store.find_password(username)
        except RecordStoreError as e:
            return self.failure("Login", e)

        authenticated = stored is not None and hmac.compare_digest(
            str(stored).encode("utf-8"), password.encode("utf-8")
        )
        if not authenticated:
            logger.info(f"Login rejected for {username!r}")

        return ServiceResult(
            success=True,
            data=[{"username": username, "authenticated": authenticated}],
            count=1 if authenticated else 0
        )
