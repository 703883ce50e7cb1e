"""
Account and link domain models.
"""

from dataclasses import dataclass


@dataclass
class Account:
    """
    A balance-holding ledger entity.

    ``balance`` is expressed in minor units (cents) and is never negative.
    """

    id: int
    balance: int = 0


@dataclass(frozen=True)
class PlayerAccountLink:
    """Relation between a player and an account, optionally marked main."""

    player_id: str
    account_id: int
    main: bool = False


@dataclass(frozen=True)
class LeaderboardEntry:
    """One row of the balance leaderboard."""

    display_name: str
    balance: int
    player_id: str
    account_id: int
