"""
Async database engine and session management.
The engine is created during app lifespan and kept on app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from codeclash.core.config import Settings
from codeclash.core.exceptions import StorageError

logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured DATABASE_URL."""
    kwargs = {"echo": settings.DATABASE_ECHO}

    if settings.DATABASE_URL.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive across sessions
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_async_engine(settings.DATABASE_URL, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables registered on SQLModel.metadata."""
    # Table models must be imported so they register on the metadata
    from codeclash.models import contest, question, submission, testcase, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ensured")


async def close_db(engine: AsyncEngine) -> None:
    await engine.dispose()


@asynccontextmanager
async def storage_errors(session: AsyncSession, message: str) -> AsyncIterator[None]:
    """Roll back and re-raise database failures as StorageError(message)."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"{message}: {e}")
        raise StorageError(message) from e


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session bound to the app's engine."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session
