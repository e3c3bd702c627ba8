"""Database dependency injection for FastAPI.

The ``Database`` handle lives on ``app.state`` (see ``main.lifespan``).
These dependencies hand it, or a session opened from it, to request
handlers.
"""

from __future__ import annotations

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.connection import Database


def get_database(request: Request) -> Database:
    """Get the application's database handle.

    Raises:
        RuntimeError: If the application was started without one.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database handle is not initialized")
    return database


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the duration of a request.

    The session is configured to NOT auto-commit. Repositories wrap each
    operation in ``async with session.begin()``.

    Yields:
        AsyncSession for database operations
    """
    async with database.session() as session:
        yield session
