"""
Database session management module.
"""
import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..core.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the async engine and the session factory for one process.

    Created in the application lifespan and disposed on shutdown; request
    handlers reach it through the ``get_database`` dependency.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs: Dict[str, Any] = {"pool_pre_ping": True}
        if not settings.DATABASE_URL.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=30,
                pool_recycle=1800,
            )
        return cls(settings.DATABASE_URL, **engine_kwargs)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("[DB] Engine disposed")
