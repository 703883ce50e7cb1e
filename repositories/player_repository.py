"""
Repository for player data access and the balance leaderboard.
"""

import logging

from domain.models.account import LeaderboardEntry
from domain.models.player import Player
from repositories.base_repository import BaseRepository
from repositories.errors import translate_store_errors
from repositories.interfaces import IPlayerRepository

logger = logging.getLogger("economy.repositories.player")


class PlayerRepository(BaseRepository, IPlayerRepository):
    """
    Handles all player-related database operations.

    Responsibilities:
    - Player identity / display name cache
    - Name lookups for command targets
    - Ranked leaderboard over main accounts
    """

    def upsert(self, player_id: str, display_name: str) -> None:
        """
        Record a player, refreshing the cached display name if already known.
        """
        with translate_store_errors("add player"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO players (player_id, display_name)
                    VALUES (?, ?)
                    ON CONFLICT(player_id) DO UPDATE SET display_name = excluded.display_name
                    """,
                    (player_id, display_name),
                )

    def get_by_id(self, player_id: str) -> Player | None:
        """
        Get player by external ID.

        Returns:
            Player object or None if not found
        """
        with translate_store_errors("get player"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT player_id, display_name FROM players WHERE player_id = ?",
                    (player_id,),
                )
                row = cursor.fetchone()
        return self._row_to_player(row) if row else None

    def get_by_name(self, display_name: str) -> Player | None:
        """Get player by cached display name (case-insensitive)."""
        with translate_store_errors("get player by name"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT player_id, display_name FROM players
                    WHERE display_name = ? COLLATE NOCASE
                    ORDER BY player_id
                    LIMIT 1
                    """,
                    (display_name,),
                )
                row = cursor.fetchone()
        return self._row_to_player(row) if row else None

    def get_all_names(self) -> list[str]:
        """Get every cached display name, sorted."""
        with translate_store_errors("list players"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT display_name FROM players ORDER BY display_name COLLATE NOCASE")
                return [row["display_name"] for row in cursor.fetchall()]

    def get_top_accounts(self, limit: int, offset: int = 0) -> list[LeaderboardEntry]:
        """
        Get main accounts ranked by balance.

        Ties are broken by display name then player ID so pagination is
        deterministic. Players without a cached name are listed by ID.

        Args:
            limit: Maximum number of rows to return
            offset: Number of rows to skip (for pagination)
        """
        with translate_store_errors("get top accounts"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT
                        l.player_id AS player_id,
                        l.account_id AS account_id,
                        COALESCE(p.display_name, l.player_id) AS display_name,
                        a.balance AS balance
                    FROM player_account_links l
                    JOIN accounts a ON a.id = l.account_id
                    LEFT JOIN players p ON p.player_id = l.player_id
                    WHERE l.main = 1
                    ORDER BY a.balance DESC, display_name ASC, l.player_id ASC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
                rows = cursor.fetchall()
        return [
            LeaderboardEntry(
                display_name=row["display_name"],
                balance=int(row["balance"]),
                player_id=row["player_id"],
                account_id=row["account_id"],
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_player(row) -> Player:
        return Player(player_id=row["player_id"], display_name=row["display_name"])
