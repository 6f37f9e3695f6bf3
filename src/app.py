"""
User Records Backend API Server
Core functionality: CRUD access to the user records table, form endpoints
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import (
    ALLOWED_ORIGINS,
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    DB_COMMAND_TIMEOUT,
    USERS_TABLE,
    ACCOUNTS_TABLE,
)
from database.connection import Database
from database.account_store import AccountStore
from database.record_store import RecordStore
from api.routing import build_router
from api.routes import auth, health, forms, users
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(database=None) -> FastAPI:
    """
    Build the FastAPI application.

    ``database`` is the handle the record store runs against; by default a
    pooled ``Database`` for the configured DSN. It is opened when the
    application starts and closed when it stops.
    """
    if database is None:
        database = Database(
            DATABASE_URL,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
            command_timeout=DB_COMMAND_TIMEOUT
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        await database.connect()
        app.state.record_store = RecordStore(database, table=USERS_TABLE, timeout=DB_COMMAND_TIMEOUT)
        app.state.account_store = AccountStore(database, table=ACCOUNTS_TABLE, timeout=DB_COMMAND_TIMEOUT)
        try:
            yield
        finally:
            await database.close()

    app = FastAPI(
        title="User Records Backend",
        description="Backend API for user record management",
        version="1.0.0",
        lifespan=lifespan
    )

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    setup_error_handling(app)

    app.include_router(build_router(health.ROUTES), tags=["Health"])
    app.include_router(build_router(forms.ROUTES), tags=["Forms"])
    app.include_router(build_router(users.ROUTES), prefix="/api/users", tags=["Users"])
    app.include_router(build_router(auth.ROUTES), prefix="/api", tags=["Auth"])

    return app
