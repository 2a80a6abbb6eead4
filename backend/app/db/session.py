"""Engine, session factory and schema bootstrap for the event store."""

import asyncio
import logging

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings
from app.db.base import Base
from app.models import event  # noqa: F401  registers the events table

logger = logging.getLogger(__name__)


class Database:
    """Owns one async engine and the sessions opened against it.

    Built once at process start (see the FastAPI lifespan) and passed to
    whatever needs storage access. ``ensure_schema`` creates the tables if
    they are missing, at most once per instance, even when several
    coroutines race to the first query.
    """

    def __init__(self, url: str, *, echo: bool = False):
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._schema_lock = asyncio.Lock()
        self._schema_ready = False

    @property
    def schema_ready(self) -> bool:
        return self._schema_ready

    async def ensure_schema(self) -> None:
        """Create missing tables and indexes (idempotent)."""
        if self._schema_ready:
            return
        async with self._schema_lock:
            if self._schema_ready:
                return
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            self._schema_ready = True
            logger.info("Event store schema ready on %s", self.engine.url.render_as_string())

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database() -> Database:
    return Database(settings.DATABASE_URL, echo=settings.DB_ECHO)


async def get_database(request: Request) -> Database:
    """FastAPI dependency: returns the Database from ``app.state``."""
    return request.app.state.database  # type: ignore[no-any-return]

