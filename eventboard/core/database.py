# DB connections

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool
import structlog

from eventboard.core.config import settings
from eventboard.core.errors import ConnectFailed, PoolExhausted

logger = structlog.get_logger()


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """
    Owns the bounded connection pool for the lifetime of the process.

    Call connect() once at startup; every request then checks a connection
    out through session() and it goes back to the pool on scope exit.
    """

    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database pool not initialized. Call connect() first.")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(
            self,
            database_url: str,
            pool_size: int = 5,
            pool_timeout: float = 30.0,
            echo: bool = False
    ) -> None:
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            database_url,
            echo=echo,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout
        )
        event.listen(self._engine.sync_engine, "connect", _set_sqlite_pragmas)

        self._sessionmaker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        logger.info("database_pool_initialized", pool_size=pool_size, pool_timeout=pool_timeout)

    async def disconnect(self) -> None:
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("database_pool_closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Check a connection out of the pool for the duration of the block.

        Raises PoolExhausted if none frees up within the pool timeout and
        ConnectFailed if the database cannot be opened. Uncommitted work is
        rolled back and the connection returned on every exit path.
        """
        if self._sessionmaker is None:
            raise RuntimeError("Database pool not initialized. Call connect() first.")

        try:
            connection = await self._engine.connect()
        except sa_exc.TimeoutError as e:
            logger.error("pool_exhausted", error=str(e))
            raise PoolExhausted() from e
        except sa_exc.DBAPIError as e:
            logger.error("database_connect_failed", error=str(e))
            raise ConnectFailed() from e

        # The session is bound to this one connection until the block exits,
        # commits included
        try:
            async with self._sessionmaker(bind=connection) as session:
                try:
                    yield session
                except Exception:
                    await session.rollback()
                    raise
        finally:
            await connection.close()


database = Database()


async def init_database() -> None:
    """Open the process-wide pool from settings"""
    await database.connect(
        settings.database_url,
        pool_size=settings.pool_size,
        pool_timeout=settings.pool_timeout,
        echo=settings.debug
    )


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency for getting async database session"""
    async with database.session() as session:
        yield session
