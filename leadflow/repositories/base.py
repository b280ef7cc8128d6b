"""Base repository class."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, Optional, TypeVar

import asyncpg
from loguru import logger

from leadflow.core.exceptions import DatabaseError
from leadflow.models.database import Database

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Base repository with common operations."""

    table_name: str = ""

    def __init__(self, database: Database):
        """
        Initialize repository with database connection.

        Args:
            database: Database instance
        """
        self.db = database

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Acquire a pooled connection, converting driver failures to DatabaseError.

        Yields:
            Database connection

        Raises:
            DatabaseError: If the driver or the network fails mid-operation
        """
        try:
            async with self.db.get_connection() as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"{self.table_name or type(self).__name__} operation failed: {e}")
            raise DatabaseError(
                f"Database operation failed on {self.table_name}",
                details={"error_type": type(e).__name__},
            ) from e

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None if not found
        """
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Any:
        """
        Create new entity.

        Args:
            data: Entity data

        Returns:
            Created entity or its ID
        """
        pass
