"""
Users service - user record operations for the API layer
"""

import logging

from database.errors import RecordStoreError
from database.record_store import RecordStore
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class UsersService(BaseService):
    """Service for user record operations"""

    def __init__(self, store: RecordStore):
        super().__init__("users")
        self.store = store

    async def create_user(self, user_id: int, name: str) -> ServiceResult:
        """
        Create a new user record

        Args:
            user_id: Caller-supplied primary key
            name: User name

        Returns:
            ServiceResult with the created record, or CONFLICT_ERROR when the id exists
        """
        try:
            new_id = await self.store.create(user_id, name)
        except RecordStoreError as e:
            return self.failure("Create", e)

        return ServiceResult(
            success=True,
            data=[{"id": new_id, "name": name}],
            count=1
        )

    async def list_users(self) -> ServiceResult:
        """Collect every user record in storage order"""
        try:
            data = [
                {"id": record.id, "name": record.name}
                async for record in self.store.list_records()
            ]
        except RecordStoreError as e:
            return self.failure("List", e)

        return ServiceResult(success=True, data=data, count=len(data))

    async def rename_user(self, user_id: int, name: str) -> ServiceResult:
        """
        Rename a user record

        A missing id is not an error: the result succeeds with count 0.
        """
        try:
            affected = await self.store.update(user_id, name)
        except RecordStoreError as e:
            return self.failure("Update", e)

        if affected == 0:
            logger.info(f"No user record {user_id} to rename")
        return ServiceResult(success=True, data=[], count=affected)

    async def delete_user(self, user_id: int) -> ServiceResult:
        """Delete a user record; count is 0 when the id did not exist"""
        try:
            affected = await self.store.delete(user_id)
        except RecordStoreError as e:
            return self.failure("Delete", e)

        return ServiceResult(success=True, data=[], count=affected)
