"""
Service for player <-> account relations and the player name cache.
"""

import logging

from domain.models.player import Player
from repositories.errors import LedgerError, PlayerHasNoAccountError
from repositories.link_repository import LinkRepository
from repositories.player_repository import PlayerRepository
from services.interfaces import IRelationService
from services.result import Result

logger = logging.getLogger("economy.services.relation")


class RelationService(IRelationService):
    """
    Manages which players hold which accounts.

    A player has at most one main account. Removing the last link to an
    account deletes the account (see LinkRepository.delete).

    get_players() and get_accounts() return an empty list both for entities
    without links and for unknown entities.
    """

    def __init__(self, link_repo: LinkRepository, player_repo: PlayerRepository):
        self.link_repo = link_repo
        self.player_repo = player_repo

    def add_player(self, player_id: str, display_name: str) -> Result[None]:
        try:
            self.player_repo.upsert(player_id, display_name)
        except LedgerError as e:
            logger.warning(f"Failed to record player {player_id}: {e.message}")
            return Result.from_error(e)
        return Result.ok()

    def get_player(self, player_id: str) -> Result[Player | None]:
        try:
            return Result.ok(self.player_repo.get_by_id(player_id))
        except LedgerError as e:
            return Result.from_error(e)

    def find_player_by_name(self, display_name: str) -> Result[Player | None]:
        try:
            return Result.ok(self.player_repo.get_by_name(display_name))
        except LedgerError as e:
            return Result.from_error(e)

    def get_player_names(self) -> Result[list[str]]:
        try:
            return Result.ok(self.player_repo.get_all_names())
        except LedgerError as e:
            return Result.from_error(e)

    def create_player_account_relation(
        self, player_id: str, account_id: int, is_main: bool = False
    ) -> Result[None]:
        try:
            self.link_repo.create(player_id, account_id, main=is_main)
        except LedgerError as e:
            logger.warning(f"Failed to link player {player_id} to account {account_id}: {e.message}")
            return Result.from_error(e)
        return Result.ok()

    def create_account_for_player(self, player_id: str, is_main: bool = False) -> Result[int]:
        """Create a new account already linked to the player."""
        try:
            account_id = self.link_repo.create_with_account(player_id, main=is_main)
        except LedgerError as e:
            logger.warning(f"Failed to create account for player {player_id}: {e.message}")
            return Result.from_error(e)
        logger.info(f"Created account {account_id} for player {player_id} (main={is_main})")
        return Result.ok(account_id)

    def delete_player_account_relation(self, player_id: str, account_id: int) -> Result[bool]:
        try:
            cascaded = self.link_repo.delete(player_id, account_id)
        except LedgerError as e:
            logger.warning(f"Failed to unlink player {player_id} from account {account_id}: {e.message}")
            return Result.from_error(e)
        return Result.ok(cascaded)

    def get_players(self, account_id: int) -> Result[list[str]]:
        try:
            return Result.ok(self.link_repo.get_players(account_id))
        except LedgerError as e:
            return Result.from_error(e)

    def get_accounts(self, player_id: str) -> Result[list[int]]:
        try:
            return Result.ok(self.link_repo.get_accounts(player_id))
        except LedgerError as e:
            return Result.from_error(e)

    def get_main_account(self, player_id: str) -> Result[int]:
        try:
            account_id = self.link_repo.get_main_account(player_id)
            if account_id is None:
                raise PlayerHasNoAccountError([player_id])
        except LedgerError as e:
            return Result.from_error(e)
        return Result.ok(account_id)

    def get_main_accounts(self, player_ids: list[str]) -> Result[dict[str, int]]:
        """
        Resolve several main accounts at once.

        Fails with PLAYER_HAS_NO_ACCOUNT naming every player that has no main
        account, rather than stopping at the first one.
        """
        try:
            found = self.link_repo.get_main_accounts(player_ids)
            missing = [pid for pid in dict.fromkeys(player_ids) if pid not in found]
            if missing:
                raise PlayerHasNoAccountError(missing)
        except LedgerError as e:
            return Result.from_error(e)
        return Result.ok(found)

    def has_account(self, player_id: str, account_id: int) -> Result[bool]:
        try:
            return Result.ok(self.link_repo.has_account(player_id, account_id))
        except LedgerError as e:
            return Result.from_error(e)

    def has_main_account(self, player_id: str) -> Result[bool]:
        try:
            return Result.ok(self.link_repo.get_main_account(player_id) is not None)
        except LedgerError as e:
            return Result.from_error(e)
