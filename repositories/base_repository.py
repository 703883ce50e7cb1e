"""
Base repository with common database operations.
"""

import logging
import sqlite3
from abc import ABC
from contextlib import contextmanager

from infrastructure.schema_manager import SchemaManager

logger = logging.getLogger("economy.repositories")


class BaseRepository(ABC):
    """
    Base class for all repositories.

    Provides common database connection management and utilities.
    """

    # Track DB paths that have already had schema initialization performed
    _schema_initialized_paths = set()

    def __init__(self, db_path: str):
        """
        Initialize repository with database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        # Ensure schema is initialized for this database path (idempotent)
        if db_path not in BaseRepository._schema_initialized_paths:
            SchemaManager(db_path).initialize()
            BaseRepository._schema_initialized_paths.add(db_path)

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory enabled."""
        # isolation_level=None: transactions are opened explicitly below
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA busy_timeout=5000")
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    @contextmanager
    def connection(self):
        """
        Context manager for database connections.

        Automatically commits on success, rolls back on exception,
        and always closes the connection.
        """
        conn = self.get_connection()
        try:
            conn.execute("BEGIN")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def atomic_transaction(self):
        """
        Context manager for atomic transactions with immediate write lock.

        Uses BEGIN IMMEDIATE to acquire a write lock immediately, so no other
        writer can interleave between the reads and writes of a composite
        operation (transfers, cascading link removal).

        The transaction commits on success and rolls back on exception.
        """
        conn = self.get_connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
