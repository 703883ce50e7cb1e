"""
Service for account lifecycle and balance operations.
"""

import logging

from repositories.account_repository import AccountRepository
from repositories.errors import LedgerError
from services.interfaces import IAccountService
from services.result import Result

logger = logging.getLogger("economy.services.account")


class AccountService(IAccountService):
    """
    Account lifecycle (create/delete) and the balance operations.

    Balances and amounts are integers in minor units. Negative amounts fail
    with INVALID_AMOUNT; zero is accepted.
    """

    def __init__(self, account_repo: AccountRepository):
        self.account_repo = account_repo

    def create_account(self) -> Result[int]:
        try:
            account_id = self.account_repo.create()
        except LedgerError as e:
            return Result.from_error(e)
        logger.info(f"Created account {account_id}")
        return Result.ok(account_id)

    def delete_account(self, account_id: int) -> Result[None]:
        try:
            self.account_repo.delete(account_id)
        except LedgerError as e:
            logger.warning(f"Failed to delete account {account_id}: {e.message}")
            return Result.from_error(e)
        logger.info(f"Deleted account {account_id}")
        return Result.ok()

    def account_exists(self, account_id: int) -> Result[bool]:
        try:
            return Result.ok(self.account_repo.exists(account_id))
        except LedgerError as e:
            return Result.from_error(e)

    def get_balance(self, account_id: int) -> Result[int]:
        try:
            return Result.ok(self.account_repo.get_balance(account_id))
        except LedgerError as e:
            return Result.from_error(e)

    def set_balance(self, account_id: int, amount: int) -> Result[None]:
        """
        Overwrite a balance.

        This is an administrative override: it may lower a balance without
        the sufficiency check that remove_balance performs. It is logged but
        not otherwise audited.
        """
        try:
            previous = self.account_repo.set_balance(account_id, amount)
        except LedgerError as e:
            logger.warning(f"Failed to set balance of account {account_id}: {e.message}")
            return Result.from_error(e)
        logger.info(f"Balance of account {account_id} overridden: {previous} -> {amount}")
        return Result.ok()

    def add_balance(self, account_id: int, amount: int) -> Result[None]:
        try:
            self.account_repo.add_balance(account_id, amount)
        except LedgerError as e:
            logger.warning(f"Failed to add {amount!r} to account {account_id}: {e.message}")
            return Result.from_error(e)
        return Result.ok()

    def remove_balance(self, account_id: int, amount: int) -> Result[None]:
        """
        Debit an account.

        INSUFFICIENT_BALANCE is also returned when the account does not
        exist; call account_exists() to tell the two apart.
        """
        try:
            self.account_repo.remove_balance(account_id, amount)
        except LedgerError as e:
            logger.warning(f"Failed to remove {amount!r} from account {account_id}: {e.message}")
            return Result.from_error(e)
        return Result.ok()
