"""Application database handle.

``Database`` owns the async engine and the session factory. One instance is
constructed when the application starts, stored on ``app.state`` and
disposed on shutdown. Nothing else holds a reference to the engine, so
tests can build an app around any handle they like.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings


class Database:
    """Engine and session factory for the application database."""

    def __init__(
        self,
        engine: AsyncEngine,
        probe: ConnectionProbe | None = None,
    ):
        self._engine = engine
        self._probe = probe or DefaultConnectionProbe()
        self._sessionmaker = async_sessionmaker(
            engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: DatabaseSettings,
        probe: ConnectionProbe | None = None,
    ) -> Database:
        """Create a handle with a pooled engine built from settings."""
        database = cls(create_engine(settings), probe=probe)
        database._probe.pool_initialized(
            host=settings.host,
            database=settings.database,
            max_conn=settings.pool_max_connections,
        )
        return database

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def is_closed(self) -> bool:
        return self._closed

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session.

        The session does not auto-commit. Repositories manage their own
        transactions with ``async with session.begin()``.
        """
        if self._closed:
            raise RuntimeError("Database handle has been disposed")
        async with self._sessionmaker() as session:
            yield session

    async def ping(self) -> None:
        """Run a trivial query to verify the database is reachable."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            self._probe.connection_failed(error=e)
            raise
        self._probe.connection_verified()

    async def dispose(self) -> None:
        """Close every pooled connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._engine.dispose()
        self._probe.pool_closed()
