"""
Ledger error taxonomy and store error translation.

Repositories raise these exceptions; services convert them into
``Result.fail(...)`` values so callers never see sqlite3 details.
"""

import logging
import sqlite3
from contextlib import contextmanager

from services import error_codes

logger = logging.getLogger("economy.repositories.errors")


class LedgerError(Exception):
    """Base class for all ledger failures. ``code`` is a stable error code."""

    code = error_codes.STORE_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccountNotFoundError(LedgerError):
    code = error_codes.ACCOUNT_NOT_FOUND

    def __init__(self, account_id: int | None = None, message: str | None = None):
        super().__init__(message or f"Account {account_id} not found.")
        self.account_id = account_id


class PlayerHasNoAccountError(LedgerError):
    code = error_codes.PLAYER_HAS_NO_ACCOUNT

    def __init__(self, player_ids: list[str]):
        names = ", ".join(player_ids)
        super().__init__(f"Player(s) without a main account: {names}.")
        self.player_ids = player_ids


class InvalidAmountError(LedgerError):
    code = error_codes.INVALID_AMOUNT

    def __init__(self, amount):
        super().__init__(f"Invalid amount: {amount!r}. Amount must be a non-negative integer.")
        self.amount = amount


class InsufficientBalanceError(LedgerError):
    code = error_codes.INSUFFICIENT_BALANCE

    def __init__(self, account_id: int, amount: int):
        super().__init__(f"Account {account_id} does not have {amount} available.")
        self.account_id = account_id
        self.amount = amount


class BalanceLimitError(LedgerError):
    code = error_codes.BALANCE_LIMIT_EXCEEDED

    def __init__(self, account_id: int, amount: int):
        super().__init__(f"Adding {amount} to account {account_id} would exceed the maximum balance.")
        self.account_id = account_id
        self.amount = amount


class StoreError(LedgerError):
    code = error_codes.STORE_ERROR


@contextmanager
def translate_store_errors(operation: str):
    """
    Convert sqlite3 failures raised inside the block into StoreError.

    OverflowError is included: the driver raises it for ints that do not
    fit a 64-bit INTEGER parameter.

    LedgerError subclasses pass through untouched.
    """
    try:
        yield
    except LedgerError:
        raise
    except (sqlite3.Error, OverflowError) as exc:
        logger.error(f"Store failure during {operation}: {exc}", exc_info=True)
        raise StoreError(f"Store failure during {operation}: {exc}") from exc
