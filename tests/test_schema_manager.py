import sqlite3

import pytest

from infrastructure.schema_manager import SchemaManager


def _connect(db_path):
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def test_schema_manager_initializes_tables(tmp_path):
    """Test that SchemaManager creates all required tables."""
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in cursor.fetchall()}

    assert {"accounts", "players", "player_account_links", "schema_migrations"}.issubset(tables)


def test_schema_manager_creates_parent_directory(tmp_path):
    """The store directory is created on first start, like plugins/Economy."""
    db_path = tmp_path / "plugins" / "Economy" / "database.db"
    SchemaManager(str(db_path)).initialize()
    assert db_path.exists()


def test_initialize_is_idempotent(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()
    SchemaManager(db_path).initialize()

    with _connect(db_path) as conn:
        names = [row[0] for row in conn.execute("SELECT name FROM schema_migrations")]
    assert len(names) == len(set(names))
    assert "add_link_indexes_v1" in names


def test_data_survives_restart(tmp_path):
    """The three tables are the durable artifact and persist across opens."""
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()
    with _connect(db_path) as conn:
        conn.execute("INSERT INTO accounts (balance) VALUES (500)")

    SchemaManager(db_path).initialize()
    with _connect(db_path) as conn:
        assert conn.execute("SELECT balance FROM accounts").fetchone()[0] == 500


def test_main_link_unique_per_player(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with _connect(db_path) as conn:
        conn.execute("INSERT INTO accounts (balance) VALUES (0)")
        conn.execute("INSERT INTO accounts (balance) VALUES (0)")
        conn.execute("INSERT INTO player_account_links (player_id, account_id, main) VALUES ('p', 1, 1)")
        # Non-main links are unrestricted
        conn.execute("INSERT INTO player_account_links (player_id, account_id, main) VALUES ('q', 1, 0)")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO player_account_links (player_id, account_id, main) VALUES ('p', 2, 1)")


def test_negative_balance_rejected_by_store(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with _connect(db_path) as conn:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO accounts (balance) VALUES (-1)")


def test_deleting_account_removes_links(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with _connect(db_path) as conn:
        conn.execute("INSERT INTO accounts (balance) VALUES (0)")
        conn.execute("INSERT INTO player_account_links (player_id, account_id, main) VALUES ('p', 1, 1)")
        conn.execute("DELETE FROM accounts WHERE id = 1")
        assert conn.execute("SELECT COUNT(*) FROM player_account_links").fetchone()[0] == 0
