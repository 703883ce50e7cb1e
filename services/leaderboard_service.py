"""
Service for the ranked balance leaderboard.
"""

from domain.models.account import LeaderboardEntry
from repositories.errors import LedgerError
from repositories.player_repository import PlayerRepository
from services import error_codes
from services.interfaces import ILeaderboardService
from services.result import Result


class LeaderboardService(ILeaderboardService):
    """Read-only ranking of players' main accounts by balance."""

    def __init__(self, player_repo: PlayerRepository):
        self.player_repo = player_repo

    def get_top_accounts(self, limit: int, offset: int = 0) -> Result[list[LeaderboardEntry]]:
        """
        Get one page of the leaderboard, highest balance first.

        Returns an empty list (not an error) when no main accounts exist.
        """
        if limit < 0 or offset < 0:
            return Result.fail(
                f"limit and offset must be non-negative (got {limit}, {offset}).",
                code=error_codes.VALIDATION_ERROR,
            )
        try:
            return Result.ok(self.player_repo.get_top_accounts(limit, offset))
        except LedgerError as e:
            return Result.from_error(e)
