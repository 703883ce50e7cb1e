"""
Data access layer.

Repositories own all SQL and raise LedgerError subclasses on failure.
"""

from repositories.account_repository import AccountRepository
from repositories.link_repository import LinkRepository
from repositories.player_repository import PlayerRepository

__all__ = ["AccountRepository", "LinkRepository", "PlayerRepository"]
