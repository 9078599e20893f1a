"""
Connection factory and per-request session dependency.

`ConnectionFactory` turns the configured `DefaultConnection` URL into an
`AsyncEngine` plus an `async_sessionmaker`. Pooling is left to SQLAlchemy and
the driver; the factory never caches connections itself.

`get_async_session` is the FastAPI dependency that implements the unit of work:
one session per request, committed once after the endpoint succeeds and rolled
back on any error. Repositories only `flush()`.
"""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from crm.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ConnectionFactory:
    """Produces connections and sessions for one database URL."""

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs):
        self.url = url
        engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_maker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionFactory":
        return cls(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Open a raw connection; closed when the block exits."""
        async with self.engine.connect() as conn:
            yield conn

    def session(self) -> AsyncSession:
        return self.session_maker()

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("db.engine.disposed", extra={"dialect": self.engine.dialect.name})


@lru_cache()
def get_connection_factory() -> ConnectionFactory:
    # Built lazily: the SQL Server driver is only imported when a request needs it.
    return ConnectionFactory.from_settings(get_settings())


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and commits it as one unit of work.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with get_connection_factory().session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
