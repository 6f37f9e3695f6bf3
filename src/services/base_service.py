"""
Base service layer turning record store errors into service results
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from database.errors import (
    RecordStoreError,
    StoreConnectionError,
    StoreTimeoutError,
    ConstraintViolation,
)

logger = logging.getLogger(__name__)

CONFLICT_ERROR = "CONFLICT_ERROR"
DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
DATABASE_ERROR = "DATABASE_ERROR"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


class BaseService:
    """Base service for operations backed by the record store"""

    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        logger.debug(f"BaseService initialized for resource: {resource_name}")

    def failure(self, operation: str, error: RecordStoreError) -> ServiceResult:
        """Map a record store error to a failed ServiceResult"""
        if isinstance(error, ConstraintViolation):
            return ServiceResult(
                success=False,
                error="Record already exists",
                error_type=CONFLICT_ERROR
            )

        if isinstance(error, StoreConnectionError):
            if isinstance(error, StoreTimeoutError):
                logger.error(f"{operation} timed out for {self.resource_name}: {error}")
            else:
                logger.error(f"{operation} could not reach the database for {self.resource_name}: {error}")
            return ServiceResult(
                success=False,
                error=f"Database unavailable: {error}",
                error_type=DATABASE_UNAVAILABLE
            )

        logger.error(f"{operation} operation failed for {self.resource_name}: {error}", exc_info=True)
        return ServiceResult(
            success=False,
            error=f"Database operation failed: {error}",
            error_type=DATABASE_ERROR
        )
