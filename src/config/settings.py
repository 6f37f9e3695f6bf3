"""
Configuration settings for the User Records Backend
"""

import os
import logging
from urllib.parse import quote

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD or QA
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database connection parts, used when DATABASE_URL is not set
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", 5432))
DB_NAME = os.getenv("DB_NAME")
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")

# Pool sizing and per round-trip timeout (seconds)
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 1))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 10.0))

USERS_TABLE = os.getenv("USERS_TABLE", "user_info")
ACCOUNTS_TABLE = os.getenv("ACCOUNTS_TABLE", "tb_user")


def build_database_url(host: str, port: int, name: str, user: str = None, password: str = "") -> str:
    """Assemble a postgres DSN from its parts"""
    credentials = ""
    if user:
        credentials = quote(user, safe="")
        if password:
            credentials += ":" + quote(password, safe="")
        credentials += "@"
    return f"postgresql://{credentials}{host}:{port}/{name}"


def redact_database_url(url: str) -> str:
    """Hide the password component of a DSN for logging"""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    credentials, host_part = rest.rsplit("@", 1)
    if ":" in credentials:
        credentials = credentials.split(":", 1)[0] + ":***REDACTED***"
    return f"{scheme}://{credentials}@{host_part}"


DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL and DB_NAME:
    DATABASE_URL = build_database_url(DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD)

logger.info(f"Environment: {ENV}")

# Validate required environment variables
if not DATABASE_URL:
    raise ValueError("DATABASE_URL (or DB_NAME) environment variable is required")
if DB_POOL_MIN_SIZE > DB_POOL_MAX_SIZE:
    raise ValueError("DB_POOL_MIN_SIZE must not exceed DB_POOL_MAX_SIZE")
if DB_COMMAND_TIMEOUT <= 0:
    raise ValueError("DB_COMMAND_TIMEOUT must be positive")

logger.info(f"Database: {redact_database_url(DATABASE_URL)} (tables: {USERS_TABLE}, {ACCOUNTS_TABLE})")

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "").split(",") if origin.strip()
]
