"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts for the ledger services.
Every operation returns a Result; none raises past the service boundary.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.account import LeaderboardEntry
    from domain.models.player import Player
    from services.result import Result


class IAccountService(ABC):
    """Interface for account lifecycle and balance operations."""

    @abstractmethod
    def create_account(self) -> "Result[int]":
        """Create an account with a zero balance and return its ID."""
        ...

    @abstractmethod
    def delete_account(self, account_id: int) -> "Result[None]":
        """Delete an account and its links."""
        ...

    @abstractmethod
    def account_exists(self, account_id: int) -> "Result[bool]":
        ...

    @abstractmethod
    def get_balance(self, account_id: int) -> "Result[int]":
        ...

    @abstractmethod
    def set_balance(self, account_id: int, amount: int) -> "Result[None]":
        """Administrative overwrite of a balance."""
        ...

    @abstractmethod
    def add_balance(self, account_id: int, amount: int) -> "Result[None]":
        ...

    @abstractmethod
    def remove_balance(self, account_id: int, amount: int) -> "Result[None]":
        ...


class IRelationService(ABC):
    """Interface for player <-> account relation management."""

    @abstractmethod
    def add_player(self, player_id: str, display_name: str) -> "Result[None]":
        """Record a player and cache their display name."""
        ...

    @abstractmethod
    def get_player(self, player_id: str) -> "Result[Player | None]":
        ...

    @abstractmethod
    def create_player_account_relation(
        self, player_id: str, account_id: int, is_main: bool = False
    ) -> "Result[None]":
        ...

    @abstractmethod
    def delete_player_account_relation(self, player_id: str, account_id: int) -> "Result[bool]":
        """Remove a link; the bool tells whether the account was cascade-deleted."""
        ...

    @abstractmethod
    def get_players(self, account_id: int) -> "Result[list[str]]":
        ...

    @abstractmethod
    def get_accounts(self, player_id: str) -> "Result[list[int]]":
        ...

    @abstractmethod
    def get_main_account(self, player_id: str) -> "Result[int]":
        ...

    @abstractmethod
    def has_account(self, player_id: str, account_id: int) -> "Result[bool]":
        ...

    @abstractmethod
    def has_main_account(self, player_id: str) -> "Result[bool]":
        ...


class ITransferService(ABC):
    """Interface for balance transfers."""

    @abstractmethod
    def transfer(self, from_account_id: int, to_account_id: int, amount: int) -> "Result[dict]":
        ...

    @abstractmethod
    def transfer_by_player(self, from_player_id: str, to_player_id: str, amount: int) -> "Result[dict]":
        ...


class ILeaderboardService(ABC):
    """Interface for the ranked balance query."""

    @abstractmethod
    def get_top_accounts(self, limit: int, offset: int = 0) -> "Result[list[LeaderboardEntry]]":
        ...
