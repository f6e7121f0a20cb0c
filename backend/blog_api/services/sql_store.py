"""
Blog Backend: SQL Data Store Client
=====================================

What:  DataStore implementation that reaches the `posts`/`comments` tables
       directly through async SQLAlchemy.
Why:   Lets the service run against a plain PostgreSQL (asyncpg) or a local
       SQLite file (aiosqlite) with the same semantics as the hosted store.
How:   One AsyncEngine for the process; one short session per operation.
       Inserts run inside `session.begin()`: commit on success, rollback on
       any error. The database generates ids and timestamps and enforces the
       foreign key, exactly as the hosted store does.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from blog_api.database import Base, build_engine, build_session_factory
from blog_api.exceptions import DataStoreError
from blog_api.models.blog import MODELS_BY_TABLE
from blog_api.services.store_base import DataStore

logger = logging.getLogger(__name__)

# aiosqlite raises OverflowError unwrapped for integers outside 64 bits
_DRIVER_ERRORS = (SQLAlchemyError, OSError, OverflowError, ValueError)


def _driver_message(exc: BaseException) -> str:
    """Prefer the DB driver's own wording over SQLAlchemy's wrapper text."""
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    return message or type(exc).__name__


class SqlDataStore(DataStore):
    """
    Async SQLAlchemy client for the blog tables.

    Args:
        engine: AsyncEngine owned by this store (disposed by close()).
    """

    backend_name = "sql"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: Optional[str] = None) -> "SqlDataStore":
        store = cls(build_engine(database_url))
        logger.info("SqlDataStore initialized (dialect=%s)", store.engine.dialect.name)
        return store

    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        model = self._model(table)
        query = select(model)
        for column, value in (filters or {}).items():
            query = query.where(self._column(model, table, column) == value)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [row.to_dict() for row in result.scalars().all()]
        except _DRIVER_ERRORS as e:
            raise DataStoreError(
                message=_driver_message(e),
                table=table,
                context={"operation": "select", "error_type": type(e).__name__},
            ) from e

    async def insert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
    ) -> List[Dict[str, Any]]:
        model = self._model(table)
        for row in rows:
            for column in row:
                self._column(model, table, column)
        objects = [model(**row) for row in rows]

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add_all(objects)
                    await session.flush()
                    # Pull server-side defaults (created_at) back into the objects
                    for obj in objects:
                        await session.refresh(obj)
        except _DRIVER_ERRORS as e:
            raise DataStoreError(
                message=_driver_message(e),
                table=table,
                context={"operation": "insert", "error_type": type(e).__name__},
            ) from e

        return [obj.to_dict() for obj in objects]

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except _DRIVER_ERRORS as e:
            logger.warning("Data Store health check failed: %s", _driver_message(e))
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()

    # ── Internals ─────────────────────────────────────────────────────────

    @staticmethod
    def _model(table: str) -> Type[Base]:
        try:
            return MODELS_BY_TABLE[table]
        except KeyError:
            raise DataStoreError(message=f'relation "{table}" does not exist', table=table)

    @staticmethod
    def _column(model: Type[Base], table: str, column: str):
        try:
            return model.__table__.c[column]
        except KeyError:
            raise DataStoreError(
                message=f'column "{column}" of relation "{table}" does not exist',
                table=table,
            )
