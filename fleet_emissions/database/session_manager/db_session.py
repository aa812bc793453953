"""
Async session manager following kkb_fastapi pattern.

``Database.init`` is called once per process (app lifespan, CLI, conftest);
``async with Database() as session`` then yields a session that is committed
on success and rolled back on error.
"""
import logging

from sqlalchemy.engine.url import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fleet_emissions.database.session_manager.exceptions import (
    DatabaseNotInitialized,
    DatabaseTransactionError,
)

logger = logging.getLogger(__name__)


class Database:
    """Process-wide async session factory."""

    _async_engine = None
    _async_session_maker: async_sessionmaker | None = None

    def __init__(self):
        self._session: AsyncSession | None = None

    @classmethod
    def init(cls, async_db_url: URL | str, engine_kw: dict | None = None):
        """
        Create the engine and session maker.

        Args:
            async_db_url: Async database URL
            engine_kw: Extra keyword arguments for create_async_engine
        """
        cls._async_engine = create_async_engine(async_db_url, **(engine_kw or {}))
        cls._async_session_maker = async_sessionmaker(
            bind=cls._async_engine, expire_on_commit=False, class_=AsyncSession
        )

    @classmethod
    async def dispose(cls):
        """Dispose the engine and forget the session maker."""
        if cls._async_engine is not None:
            await cls._async_engine.dispose()
        cls._async_engine = None
        cls._async_session_maker = None

    async def __aenter__(self) -> AsyncSession:
        if self._async_session_maker is None:
            raise DatabaseNotInitialized("Call Database.init() before opening a session")
        self._session = self._async_session_maker()
        return self._session

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is not None:
                await self._session.rollback()
                return
            try:
                await self._session.commit()
            except SQLAlchemyError as e:
                logger.error(f"Failed to commit session: {e}")
                await self._session.rollback()
                raise DatabaseTransactionError(str(e)) from e
        finally:
            await self._session.close()
