"""
Database configuration and session management.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from llm_records.data.models import Base
from llm_records.infra.config.logging_config import get_logger

MEMORY_PATH = ":memory:"


class Database:
    """Owns the async engine and session factory for one SQLite database."""

    def __init__(self, sqlite_path: str, echo: bool = False) -> None:
        self.sqlite_path = sqlite_path
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._log = get_logger("infra.database")

    @property
    def in_memory(self) -> bool:
        return self.sqlite_path == MEMORY_PATH

    @property
    def url(self) -> str:
        return f"sqlite+aiosqlite:///{self.sqlite_path}"

    async def initialize(self) -> None:
        self._log.info("database.initialize", path=self.sqlite_path)

        engine_kwargs = {"echo": self.echo}
        if self.in_memory:
            # Every session must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            Path(self.sqlite_path).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_async_engine(self.url, **engine_kwargs)
        event.listen(self.engine.sync_engine, "connect", self._apply_pragmas)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    def _apply_pragmas(self, dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if not self.in_memory:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    async def create_all(self) -> None:
        """Create tables that do not exist yet."""
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._log.info("database.schema.ready")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self._log.info("database.closed")
        self.engine = None
        self.session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; callers commit explicitly (see ``UnitOfWork``)."""
        if self.session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            self._log.error("database.health_check.failed", error=str(e))
            return False
