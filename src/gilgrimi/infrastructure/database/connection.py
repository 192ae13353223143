"""
Database Connection Management

Async SQLAlchemy engine and session lifecycle for the conversation
state backend:
- Connection pooling (PostgreSQL)
- Health checks
- Graceful shutdown
- Transaction management

SECURITY: Connection strings contain credentials and must
never be logged.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import text

from gilgrimi.config import get_settings
from gilgrimi.config.settings import DatabaseSettings
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all ORM models."""
    pass


class DatabaseManager:
    """
    Manages database connections and sessions.

    Usage:
        db = DatabaseManager()
        await db.initialize()
        async with db.session() as session:
            # use session
        await db.close()
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None) -> None:
        """
        Initialize database manager (connection not established).

        Args:
            settings: Database settings (defaults to application settings)
        """
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._initialized = False

    def _engine_options(self, settings: DatabaseSettings, echo: bool) -> dict[str, Any]:
        options: dict[str, Any] = {"echo": echo}
        if not settings.is_sqlite:
            options.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        return options

    async def initialize(self) -> None:
        """
        Initialize database engine and session factory.

        Should be called once during application startup.
        """
        if self._initialized:
            logger.warning("Database already initialized")
            return

        app_settings = get_settings()
        settings = self._settings or app_settings.database

        self._engine = create_async_engine(
            settings.async_url,
            **self._engine_options(settings, echo=app_settings.debug),
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        self._initialized = True
        logger.info("Database connection pool initialized", sqlite=settings.is_sqlite)

    async def create_tables(self) -> None:
        """
        Create missing tables from the ORM metadata.

        Used for SQLite and local development; PostgreSQL deployments
        run the alembic migrations instead.
        """
        if not self._engine:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        # Register models on Base.metadata
        from gilgrimi.infrastructure.database import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """
        Close database connections.

        Should be called during application shutdown.
        """
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self._initialized = False
            logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session with automatic commit/rollback.

        Yields:
            AsyncSession: Database session
        """
        if not self._session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if database is reachable, False otherwise
        """
        if not self._engine:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._initialized
