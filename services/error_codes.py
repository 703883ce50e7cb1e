"""
Standard error codes for the ledger service layer.

These error codes allow command handlers to programmatically handle
specific error conditions without parsing error message text.

Usage:
    from services.error_codes import ACCOUNT_NOT_FOUND, INSUFFICIENT_BALANCE
    from services.result import Result

    if not result.success and result.error_code == INSUFFICIENT_BALANCE:
        ...
"""

# General errors
VALIDATION_ERROR = "validation_error"

# Ledger errors
ACCOUNT_NOT_FOUND = "account_not_found"
PLAYER_HAS_NO_ACCOUNT = "player_has_no_account"
INVALID_AMOUNT = "invalid_amount"
INSUFFICIENT_BALANCE = "insufficient_balance"
BALANCE_LIMIT_EXCEEDED = "balance_limit_exceeded"

# Any store failure that does not map to a domain condition above
STORE_ERROR = "store_error"
