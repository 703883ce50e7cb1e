"""
Schema and migration management for the ledger's SQLite store.
"""

import logging
import os
import sqlite3

logger = logging.getLogger("economy.schema")


class SchemaManager:
    """
    Owns schema creation and migrations.

    Call initialize() to ensure schema is present and migrations are applied.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def initialize(self) -> None:
        """Create base schema and apply migrations."""
        logger.info(f"Initializing database schema: {self.db_path}")
        self._ensure_directory()
        conn = self._connect()
        try:
            cursor = conn.cursor()
            self._create_base_schema(cursor)
            self._create_schema_migrations_table(cursor)
            self._run_migrations(cursor)
            conn.commit()
        finally:
            conn.close()

    def _ensure_directory(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.db_path))
        os.makedirs(directory, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA busy_timeout=5000")
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _create_base_schema(self, cursor) -> None:
        # Accounts: balance is stored in minor units (cents)
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS accounts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                balance INTEGER NOT NULL DEFAULT 0 CHECK (balance >= 0)
            )
            """
        )

        # Players: identity plus cached display name
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                player_id TEXT PRIMARY KEY,
                display_name TEXT NOT NULL
            )
            """
        )

        # Player <-> account relation
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS player_account_links (
                player_id TEXT NOT NULL,
                account_id INTEGER NOT NULL,
                main INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (player_id, account_id),
                FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
            )
            """
        )

        # At most one main account per player
        cursor.execute(
            """
            CREATE UNIQUE INDEX IF NOT EXISTS idx_player_account_links_main
            ON player_account_links (player_id)
            WHERE main = 1
            """
        )

    # --- Migration helpers ---

    def _create_schema_migrations_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _run_migrations(self, cursor) -> None:
        applied = {row["name"] for row in cursor.execute("SELECT name FROM schema_migrations")}
        for name, action in self._get_migrations():
            if name in applied:
                continue
            logger.info(f"Applying migration: {name}")
            action(cursor)
            cursor.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)",
                (name,),
            )

    def _get_migrations(self):
        return [
            ("add_link_indexes_v1", self._migration_add_link_indexes_v1),
            ("add_player_name_index", self._migration_add_player_name_index),
        ]

    # --- Migrations ---

    def _migration_add_link_indexes_v1(self, cursor) -> None:
        # Cascade counting and get_players() look links up by account
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_player_account_links_account
            ON player_account_links (account_id)
            """
        )

    def _migration_add_player_name_index(self, cursor) -> None:
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_players_display_name
            ON players (display_name COLLATE NOCASE)
            """
        )
