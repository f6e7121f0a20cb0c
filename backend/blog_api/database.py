"""
Blog Backend: Database Engine Helpers
=======================================

What:  Declarative base, async engine construction and session factory.
Why:   The SQL-backed Data Store client needs an engine; building it in a
       function (not at import) lets the app and tests each own their engine.
Who:   Used by SqlDataStore and by tests that create the schema.

Connection Pooling Strategy:
    pool_size / max_overflow / pool_pre_ping come from settings for server
    databases. SQLite URLs skip the pool arguments (its dialect picks its
    own pool class) and turn on foreign key enforcement per connection,
    otherwise ON DELETE CASCADE and FK rejection would silently not happen.
"""

from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import settings


class Base(DeclarativeBase):
    """Base class for the `posts` and `comments` ORM models."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL (defaults to settings.database_url).

    Returns:
        AsyncEngine with FK enforcement on SQLite and pooling on servers.
    """
    url = database_url or settings.database_url
    is_sqlite = url.startswith("sqlite")

    kwargs = {"echo": settings.log_level == "DEBUG"}
    if not is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    engine = create_async_engine(url, **kwargs)

    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: row attributes stay readable after commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """
    Create the `posts` and `comments` tables if they are missing.

    The hosted store is provisioned outside this service; this exists for
    local SQLite databases and the test suite.
    """
    # Import registers the models on Base.metadata
    from blog_api.models import blog  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
