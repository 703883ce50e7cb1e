"""
Application services layer.

Services orchestrate ledger operations using repositories and return
Result values instead of raising.
"""

from services import error_codes

# Result type for consistent error handling
from services.result import Result

# Service interfaces (ABCs)
from services.interfaces import (
    IAccountService,
    ILeaderboardService,
    IRelationService,
    ITransferService,
)

__all__ = [
    "error_codes",
    # Result type
    "Result",
    # Interfaces
    "IAccountService",
    "ILeaderboardService",
    "IRelationService",
    "ITransferService",
]
