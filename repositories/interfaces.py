"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod


class IAccountRepository(ABC):
    @abstractmethod
    def create(self) -> int: ...

    @abstractmethod
    def delete(self, account_id: int) -> None: ...

    @abstractmethod
    def exists(self, account_id: int) -> bool: ...

    @abstractmethod
    def get(self, account_id: int): ...

    @abstractmethod
    def get_balance(self, account_id: int) -> int: ...

    @abstractmethod
    def set_balance(self, account_id: int, amount: int) -> int: ...

    @abstractmethod
    def add_balance(self, account_id: int, amount: int) -> None: ...

    @abstractmethod
    def remove_balance(self, account_id: int, amount: int) -> None: ...

    @abstractmethod
    def transfer_atomic(self, from_account_id: int, to_account_id: int, amount: int) -> dict[str, int]: ...


class IPlayerRepository(ABC):
    @abstractmethod
    def upsert(self, player_id: str, display_name: str) -> None: ...

    @abstractmethod
    def get_by_id(self, player_id: str): ...

    @abstractmethod
    def get_by_name(self, display_name: str): ...

    @abstractmethod
    def get_all_names(self) -> list[str]: ...

    @abstractmethod
    def get_top_accounts(self, limit: int, offset: int = 0): ...


class ILinkRepository(ABC):
    @abstractmethod
    def create(self, player_id: str, account_id: int, main: bool = False) -> None: ...

    @abstractmethod
    def create_with_account(self, player_id: str, main: bool = False) -> int: ...

    @abstractmethod
    def delete(self, player_id: str, account_id: int) -> bool: ...

    @abstractmethod
    def get_players(self, account_id: int) -> list[str]: ...

    @abstractmethod
    def get_links(self, player_id: str): ...

    @abstractmethod
    def get_accounts(self, player_id: str) -> list[int]: ...

    @abstractmethod
    def get_main_account(self, player_id: str) -> int | None: ...

    @abstractmethod
    def has_account(self, player_id: str, account_id: int) -> bool: ...
