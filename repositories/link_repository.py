"""
Repository for player <-> account links, including cascading cleanup.
"""

import logging
import sqlite3

from domain.models.account import PlayerAccountLink
from repositories.base_repository import BaseRepository
from repositories.errors import AccountNotFoundError, StoreError, translate_store_errors
from repositories.interfaces import ILinkRepository

logger = logging.getLogger("economy.repositories.link")


class LinkRepository(BaseRepository, ILinkRepository):
    """
    Handles the player_account_links relation.

    Invariants:
    - at most one main link per player (partial unique index)
    - an account whose last link is removed is deleted in the same transaction
    """

    def create(self, player_id: str, account_id: int, main: bool = False) -> None:
        """
        Link a player to an existing account.

        Raises:
            AccountNotFoundError: If the account does not exist
            StoreError: If the link already exists, or main is requested for a
                player that already has a main account
        """
        with translate_store_errors("create link"):
            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT 1 FROM accounts WHERE id = ?", (account_id,))
                if cursor.fetchone() is None:
                    raise AccountNotFoundError(account_id)
                self._insert_link(cursor, player_id, account_id, main)
        logger.debug(f"Linked player {player_id} to account {account_id} (main={main})")

    def create_with_account(self, player_id: str, main: bool = False) -> int:
        """
        Create a new account and link it to a player in one transaction.

        Returns:
            The new account ID

        Raises:
            StoreError: If the link violates a constraint; the account is not kept
        """
        with translate_store_errors("create linked account"):
            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                cursor.execute("INSERT INTO accounts (balance) VALUES (0)")
                account_id = cursor.lastrowid
                if not account_id:
                    raise StoreError("Account insert returned no ID.")
                self._insert_link(cursor, player_id, account_id, main)
        logger.debug(f"Created account {account_id} for player {player_id} (main={main})")
        return account_id

    def delete(self, player_id: str, account_id: int) -> bool:
        """
        Remove a link and delete the account if it has no links left.

        The delete and the orphan check share one BEGIN IMMEDIATE transaction,
        so no link can be added to the account in between.

        Returns:
            True if the account was deleted as a result

        Raises:
            AccountNotFoundError: If no such link existed
        """
        with translate_store_errors("delete link"):
            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "DELETE FROM player_account_links WHERE player_id = ? AND account_id = ?",
                    (player_id, account_id),
                )
                if cursor.rowcount == 0:
                    raise AccountNotFoundError(
                        account_id,
                        message=f"Player {player_id} is not linked to account {account_id}.",
                    )
                cursor.execute(
                    """
                    DELETE FROM accounts
                    WHERE id = ?
                    AND NOT EXISTS (SELECT 1 FROM player_account_links WHERE account_id = ?)
                    """,
                    (account_id, account_id),
                )
                cascaded = cursor.rowcount > 0

        if cascaded:
            logger.info(f"Account {account_id} deleted after its last link (player {player_id}) was removed")
        return cascaded

    def get_players(self, account_id: int) -> list[str]:
        """Player IDs linked to an account (empty for unknown accounts too)."""
        with translate_store_errors("get players"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT player_id FROM player_account_links WHERE account_id = ? ORDER BY player_id",
                    (account_id,),
                )
                return [row["player_id"] for row in cursor.fetchall()]

    def get_links(self, player_id: str) -> list[PlayerAccountLink]:
        """A player's links ordered by account ID (empty for unknown players too)."""
        with translate_store_errors("get links"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT player_id, account_id, main FROM player_account_links
                    WHERE player_id = ? ORDER BY account_id
                    """,
                    (player_id,),
                )
                rows = cursor.fetchall()
        return [
            PlayerAccountLink(
                player_id=row["player_id"],
                account_id=int(row["account_id"]),
                main=bool(row["main"]),
            )
            for row in rows
        ]

    def get_accounts(self, player_id: str) -> list[int]:
        """Account IDs linked to a player (empty for unknown players too)."""
        return [link.account_id for link in self.get_links(player_id)]

    def get_main_account(self, player_id: str) -> int | None:
        with translate_store_errors("get main account"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT account_id FROM player_account_links WHERE player_id = ? AND main = 1",
                    (player_id,),
                )
                row = cursor.fetchone()
        return int(row["account_id"]) if row else None

    def get_main_accounts(self, player_ids: list[str]) -> dict[str, int]:
        """Main account per player, omitting players that have none."""
        if not player_ids:
            return {}
        placeholders = ",".join("?" * len(player_ids))
        with translate_store_errors("get main accounts"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"""
                    SELECT player_id, account_id FROM player_account_links
                    WHERE main = 1 AND player_id IN ({placeholders})
                    """,
                    list(player_ids),
                )
                return {row["player_id"]: int(row["account_id"]) for row in cursor.fetchall()}

    def has_account(self, player_id: str, account_id: int) -> bool:
        with translate_store_errors("check link"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT 1 FROM player_account_links WHERE player_id = ? AND account_id = ?",
                    (player_id, account_id),
                )
                return cursor.fetchone() is not None

    @staticmethod
    def _insert_link(cursor, player_id: str, account_id: int, main: bool) -> None:
        try:
            cursor.execute(
                "INSERT INTO player_account_links (player_id, account_id, main) VALUES (?, ?, ?)",
                (player_id, account_id, 1 if main else 0),
            )
        except sqlite3.IntegrityError as exc:
            if main and "player_account_links.player_id" in str(exc) and "account_id" not in str(exc):
                raise StoreError(f"Player {player_id} already has a main account.") from exc
            raise StoreError(f"Could not link player {player_id} to account {account_id}: {exc}") from exc
