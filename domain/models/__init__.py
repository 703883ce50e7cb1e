"""
Domain models - pure data structures representing ledger entities.
"""

from domain.models.account import Account, LeaderboardEntry, PlayerAccountLink
from domain.models.player import Player

__all__ = ["Account", "LeaderboardEntry", "Player", "PlayerAccountLink"]
