"""Process-wide database handle shared by the API lifespan and scripts."""

import asyncio
from typing import TYPE_CHECKING, Optional

from loguru import logger

from leadflow.models.database import Database

if TYPE_CHECKING:
    from leadflow.core.config.settings import LeadflowSettings


class DatabaseFactory:
    """
    Owner of the single Database used by the process.

    The API lifespan calls ``connect`` on startup and ``close_instance`` on
    shutdown; ``scripts/seed_admin.py`` does the same around its one write.
    """

    _instance: Optional[Database] = None
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def get_instance(
        cls, database_url: Optional[str] = None, pool_size: Optional[int] = None
    ) -> Database:
        """
        Return the shared Database, creating it on first use.

        Args:
            database_url: PostgreSQL URL, honoured only when creating
            pool_size: Pool size, honoured only when creating
        """
        if cls._instance is None:
            cls._instance = Database(database_url=database_url, pool_size=pool_size)
        return cls._instance

    @classmethod
    async def connect(cls, settings: "LeadflowSettings") -> Database:
        """
        Return the shared Database with its pool open.

        Args:
            settings: Source of DATABASE_URL and DB_POOL_SIZE

        Returns:
            Connected Database
        """
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        async with cls._lock:
            db = cls.get_instance(settings.database_url, settings.db_pool_size)
            if db.pool is None:
                await db.connect()
                logger.info(f"Database pool ready (size={db.pool_size})")
            return db

    @classmethod
    async def close_instance(cls) -> None:
        """Close and forget the shared Database."""
        db, cls._instance = cls._instance, None
        if db is not None:
            await db.close()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the shared Database without closing it."""
        cls._instance = None
        cls._lock = None
