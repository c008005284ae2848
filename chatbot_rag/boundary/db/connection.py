"""
Async engine, session factory and the request-scoped session dependency.

Dependencies: sqlalchemy, chatbot_rag.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from chatbot_rag.configs import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Build the process-wide engine from DatabaseSettings.

    Returns:
        AsyncEngine: Cached engine; SQLite connections enforce foreign keys
    """
    database = get_settings().database
    engine = create_async_engine(database.url, **database.engine_options())
    if database.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory without autoflush or expiry on commit; services commit explicitly."""
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    The session is closed when the request finishes; uncommitted work is
    rolled back by the close.
    """
    async with get_async_session_factory()() as session:
        yield session
