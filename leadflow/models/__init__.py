"""Persistence layer: asyncpg-backed database manager."""

from .database import Database, DatabaseState, require_connection
from .db_factory import DatabaseFactory

__all__ = ["Database", "DatabaseFactory", "DatabaseState", "require_connection"]
