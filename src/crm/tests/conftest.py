"""
Core pytest configuration for the entire test suite.

Database: every test gets a fresh schema. By default that is an in-memory
SQLite database (aiosqlite, one shared connection via StaticPool); set
TEST_DATABASE_URL to run the same suite against a real server.

Domain fixtures (entity factories, HTTP client) live in tests/test_fixtures/
and are imported at the bottom of this module so every test can use them.
"""

import logging
import os

# Settings are read from the environment on first use; provide what tests need
# before any crm module calls get_settings().
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_FORMAT", "text")

# Quiet noisy third-party loggers during collection
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

from typing import AsyncGenerator
from urllib.parse import urlparse

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from crm import models  # noqa: F401 - registers every table on Base.metadata
from crm.config.settings import get_settings
from crm.core.logging.builder import setup_logging
from crm.database.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Install the application logging config once for the session."""
    setup_logging(settings)
    yield


def safe_log_db_url(db_url: str) -> str:
    """Scheme, host, port and database only; credentials are dropped."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. TEST_DATABASE_URL (CI override)
    2. the application's DATABASE_URL when TESTING=true
    3. in-memory SQLite
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    if settings.TESTING and settings.TEST_DATABASE_URL:
        return settings.DATABASE_URL
    return "sqlite+aiosqlite://"


TEST_DATABASE_URL = get_test_database_url()
logger.info("tests.database", extra={"url": safe_log_db_url(TEST_DATABASE_URL)})


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    if TEST_DATABASE_URL.startswith("sqlite"):
        # one connection for the whole test, otherwise each connection sees its own empty database
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for repository/handler tests. Repositories only flush, so nothing
    is committed unless a test does it; the schema is dropped afterwards anyway.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()


# Domain fixtures
from .test_fixtures.entity_fixtures import (  # noqa: E402,F401
    user_id,
    make_lookup,
    activity_type,
    activity_status,
    invoice_status,
    payment_method,
    quote_status,
    activity_command,
    make_activity,
    make_invoice,
    make_payment,
    make_quote,
    make_user,
    make_team,
    make_role,
)
from .test_fixtures.api_fixtures import (  # noqa: E402,F401
    app,
    client,
    auth_headers,
    jwt_service,
)
