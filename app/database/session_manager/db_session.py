"""
Process-wide async session manager.

``Database.init`` is called once at startup; afterwards ``async with Database()``
yields a session that commits on success and rolls back on error.
"""
import logging

from sqlalchemy.engine.url import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.database.base import get_async_engine
from app.database.session_manager.exceptions import (
    DatabaseNotInitialized,
    DatabaseTransactionError,
)

logger = logging.getLogger(__name__)


class Database:
    """Async context manager around a session from the shared session maker."""

    _engine: AsyncEngine | None = None
    _async_session_maker: async_sessionmaker | None = None

    def __init__(self):
        if Database._async_session_maker is None:
            raise DatabaseNotInitialized("Database not initialized")
        self.session: AsyncSession | None = None

    @classmethod
    def init(cls, async_db_url: URL, engine_kw: dict | None = None):
        """Create the engine and session maker."""
        cls._engine = get_async_engine(async_db_url, **(engine_kw or {}))
        cls._async_session_maker = async_sessionmaker(
            bind=cls._engine, expire_on_commit=False, class_=AsyncSession
        )

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._async_session_maker is not None

    @classmethod
    async def close(cls):
        """Dispose the engine and forget the session maker."""
        if cls._engine is not None:
            await cls._engine.dispose()
        cls._engine = None
        cls._async_session_maker = None

    async def __aenter__(self) -> AsyncSession:
        self.session = Database._async_session_maker()
        return self.session

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.session.commit()
            else:
                await self.session.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Database transaction failed: {e}")
            await self.session.rollback()
            raise DatabaseTransactionError(str(e)) from e
        finally:
            await self.session.close()
