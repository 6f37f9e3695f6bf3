"""
Health check API route
"""

import logging
from datetime import datetime
from fastapi import HTTPException, Depends

from api.dependencies import get_record_store
from api.routing import Route
from database.errors import RecordStoreError
from database.record_store import RecordStore

logger = logging.getLogger(__name__)


async def health_check(store: RecordStore = Depends(get_record_store)):
    """Health check - reports unhealthy only when the database cannot be reached"""
    try:
        await store.ping()
    except RecordStoreError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "connected"
    }


ROUTES = [
    Route("/health", ["GET"], health_check),
]
