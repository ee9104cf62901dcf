"""
Database connection and session management.

Uses SQLAlchemy async for non-blocking database operations. PostgreSQL
(asyncpg) in production, SQLite (aiosqlite) in development.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)

from core.config import Settings
from models.db_models import Base


class DatabaseManager:
    """
    Manages database connections using SQLAlchemy async.

    The engine is created on first use so importing the application never
    opens a connection.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self._database_url = database_url
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "DatabaseManager":
        return cls(app_settings.connection_strings.default, echo=app_settings.debug)

    @property
    def database_url(self) -> str:
        return self._database_url

    def _engine_options(self) -> dict:
        options = {"echo": self._echo, "pool_pre_ping": True}
        # SQLite drivers manage their own pools
        if not self._database_url.startswith("sqlite"):
            options.update(pool_size=5, max_overflow=10)
        return options

    def _connect(self) -> None:
        self._engine = create_async_engine(self._database_url, **self._engine_options())
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        """Get the SQLAlchemy async engine."""
        if self._engine is None:
            self._connect()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._connect()
        return self._session_factory

    async def init_db(self) -> None:
        """
        Initialize database schema.

        Creates all tables if they don't exist.
        Should be called on application startup.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """
        Close database connections.

        Should be called on application shutdown.
        """
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session as an async context manager.

        Usage:
            async with db_manager.session() as session:
                result = await session.execute(query)
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @app.get("/items")
        async def get_items(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with request.app.state.db_manager.session() as session:
        yield session
