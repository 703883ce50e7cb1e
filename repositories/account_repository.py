"""
Repository for account and balance data access.
"""

import logging

from config import MAX_BALANCE
from domain.models.account import Account
from repositories.base_repository import BaseRepository
from repositories.errors import (
    AccountNotFoundError,
    BalanceLimitError,
    InsufficientBalanceError,
    InvalidAmountError,
    StoreError,
    translate_store_errors,
)
from repositories.interfaces import IAccountRepository

logger = logging.getLogger("economy.repositories.account")


def validate_amount(amount) -> int:
    """
    Ensure ``amount`` is an integer number of minor units in 0..MAX_BALANCE.

    Raises:
        InvalidAmountError: for negative, oversized, non-integer or boolean amounts
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= MAX_BALANCE:
        raise InvalidAmountError(amount)
    return amount


class AccountRepository(BaseRepository, IAccountRepository):
    """
    Handles all account-related database operations.

    Responsibilities:
    - Account creation and deletion
    - Balance reads and the three balance mutations (set/add/remove)
    - Atomic account-to-account transfers
    """

    def create(self) -> int:
        """
        Insert a new account with a zero balance.

        Returns:
            The store-assigned account ID

        Raises:
            StoreError: If the insert fails or no ID is returned
        """
        with translate_store_errors("create account"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute("INSERT INTO accounts (balance) VALUES (0)")
                account_id = cursor.lastrowid
        if not account_id:
            raise StoreError("Account insert returned no ID.")
        logger.debug(f"Created account {account_id}")
        return account_id

    def delete(self, account_id: int) -> None:
        """
        Delete an account. Links to it are removed by ON DELETE CASCADE.

        Raises:
            AccountNotFoundError: If no account matched
        """
        with translate_store_errors("delete account"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM accounts WHERE id = ?", (account_id,))
                if cursor.rowcount == 0:
                    raise AccountNotFoundError(account_id)
        logger.debug(f"Deleted account {account_id}")

    def exists(self, account_id: int) -> bool:
        with translate_store_errors("check account"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT 1 FROM accounts WHERE id = ?", (account_id,))
                return cursor.fetchone() is not None

    def get(self, account_id: int) -> Account:
        """
        Load an account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        with translate_store_errors("get account"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT id, balance FROM accounts WHERE id = ?", (account_id,))
                row = cursor.fetchone()
        if row is None:
            raise AccountNotFoundError(account_id)
        return Account(id=int(row["id"]), balance=int(row["balance"]))

    def get_balance(self, account_id: int) -> int:
        """Get an account's balance in minor units."""
        return self.get(account_id).balance

    def set_balance(self, account_id: int, amount: int) -> int:
        """
        Overwrite an account's balance.

        Returns:
            The balance before the overwrite

        Raises:
            InvalidAmountError: If amount is negative or above MAX_BALANCE
            AccountNotFoundError: If the account does not exist
        """
        validate_amount(amount)
        with translate_store_errors("set balance"):
            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT balance FROM accounts WHERE id = ?", (account_id,))
                row = cursor.fetchone()
                if row is None:
                    raise AccountNotFoundError(account_id)
                cursor.execute(
                    "UPDATE accounts SET balance = ? WHERE id = ?",
                    (amount, account_id),
                )
                return int(row["balance"])

    def add_balance(self, account_id: int, amount: int) -> None:
        """
        Credit an account.

        Raises:
            InvalidAmountError: If amount is negative or above MAX_BALANCE
            AccountNotFoundError: If no account matched
            BalanceLimitError: If the new balance would exceed MAX_BALANCE
        """
        validate_amount(amount)
        with translate_store_errors("add balance"):
            with self.connection() as conn:
                self._credit(conn.cursor(), account_id, amount)

    @staticmethod
    def _credit(cursor, account_id: int, amount: int) -> None:
        # SQLite silently turns an INTEGER past 2**63-1 into a REAL
        cursor.execute(
            "UPDATE accounts SET balance = balance + ? WHERE id = ? AND balance <= ?",
            (amount, account_id, MAX_BALANCE - amount),
        )
        if cursor.rowcount == 1:
            return
        cursor.execute("SELECT 1 FROM accounts WHERE id = ?", (account_id,))
        if cursor.fetchone() is None:
            raise AccountNotFoundError(account_id)
        raise BalanceLimitError(account_id, amount)

    def remove_balance(self, account_id: int, amount: int) -> None:
        """
        Debit an account in a single conditional update.

        A missing account and an insufficient balance both match zero rows,
        so both are reported as InsufficientBalanceError. Use exists() first
        if the distinction matters.

        Raises:
            InvalidAmountError: If amount is negative
            InsufficientBalanceError: If no row satisfied balance >= amount
        """
        validate_amount(amount)
        with translate_store_errors("remove balance"):
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE accounts SET balance = balance - ? WHERE id = ? AND balance >= ?",
                    (amount, account_id, amount),
                )
                if cursor.rowcount == 0:
                    raise InsufficientBalanceError(account_id, amount)

    def transfer_atomic(self, from_account_id: int, to_account_id: int, amount: int) -> dict[str, int]:
        """
        Atomically move ``amount`` from one account to another.

        Debit and credit run in one BEGIN IMMEDIATE transaction. If either
        step fails the whole transfer is rolled back.

        Returns:
            Dict with 'amount', 'from_new_balance', 'to_new_balance'

        Raises:
            InvalidAmountError: If amount is negative
            InsufficientBalanceError: If the debit could not be satisfied
            AccountNotFoundError: If the destination account does not exist
            BalanceLimitError: If the credit would exceed MAX_BALANCE
        """
        validate_amount(amount)
        with translate_store_errors("transfer"):
            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE accounts SET balance = balance - ? WHERE id = ? AND balance >= ?",
                    (amount, from_account_id, amount),
                )
                if cursor.rowcount == 0:
                    raise InsufficientBalanceError(from_account_id, amount)

                self._credit(cursor, to_account_id, amount)

                cursor.execute(
                    "SELECT id, balance FROM accounts WHERE id IN (?, ?)",
                    (from_account_id, to_account_id),
                )
                balances = {row["id"]: int(row["balance"]) for row in cursor.fetchall()}

        return {
            "amount": amount,
            "from_new_balance": balances[from_account_id],
            "to_new_balance": balances[to_account_id],
        }
