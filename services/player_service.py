"""
Player-level economy operations.

Thin conveniences that resolve a player's main account and then delegate to
the account and relation services. The command layer works in terms of
players, not account IDs.
"""

from services.account_service import AccountService
from services.relation_service import RelationService
from services.result import Result


class PlayerService:
    """Balance operations addressed by player ID instead of account ID."""

    def __init__(self, account_service: AccountService, relation_service: RelationService):
        self.account_service = account_service
        self.relation_service = relation_service

    def create_account_for_player(self, player_id: str, main: bool = False) -> Result[int]:
        """Create an account for the player; the account and link commit together."""
        return self.relation_service.create_account_for_player(player_id, is_main=main)

    def add_player_to_account(self, player_id: str, account_id: int) -> Result[None]:
        """Give a player (non-main) access to an existing account."""
        return self.relation_service.create_player_account_relation(player_id, account_id, is_main=False)

    def remove_player_from_account(self, player_id: str, account_id: int) -> Result[bool]:
        """Revoke access; the account is deleted if nobody is left on it."""
        return self.relation_service.delete_player_account_relation(player_id, account_id)

    def get_player_balance(self, player_id: str) -> Result[int]:
        return self.relation_service.get_main_account(player_id).map(self.account_service.get_balance)

    def set_player_balance(self, player_id: str, amount: int) -> Result[None]:
        return self.relation_service.get_main_account(player_id).map(
            lambda account_id: self.account_service.set_balance(account_id, amount)
        )

    def add_player_balance(self, player_id: str, amount: int) -> Result[None]:
        return self.relation_service.get_main_account(player_id).map(
            lambda account_id: self.account_service.add_balance(account_id, amount)
        )

    def remove_player_balance(self, player_id: str, amount: int) -> Result[None]:
        return self.relation_service.get_main_account(player_id).map(
            lambda account_id: self.account_service.remove_balance(account_id, amount)
        )
