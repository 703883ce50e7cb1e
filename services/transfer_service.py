"""
Service for moving balance between accounts and between players.
"""

import logging

from repositories.account_repository import AccountRepository
from repositories.errors import LedgerError
from services.interfaces import ITransferService
from services.relation_service import RelationService
from services.result import Result

logger = logging.getLogger("economy.services.transfer")


class TransferService(ITransferService):
    """
    Transfers are a debit and a credit committed together.

    Both updates run inside one BEGIN IMMEDIATE transaction
    (AccountRepository.transfer_atomic), so a failed credit never leaves
    the source debited.
    """

    def __init__(self, account_repo: AccountRepository, relation_service: RelationService):
        self.account_repo = account_repo
        self.relation_service = relation_service

    def transfer(self, from_account_id: int, to_account_id: int, amount: int) -> Result[dict]:
        """
        Move ``amount`` from one account to another.

        Returns:
            Result.ok(dict with 'amount', 'from_new_balance', 'to_new_balance')
            Result.fail with INVALID_AMOUNT, INSUFFICIENT_BALANCE,
            ACCOUNT_NOT_FOUND (destination) or STORE_ERROR
        """
        try:
            result = self.account_repo.transfer_atomic(from_account_id, to_account_id, amount)
        except LedgerError as e:
            logger.warning(
                f"Transfer of {amount!r} from account {from_account_id} "
                f"to account {to_account_id} failed: {e.message}"
            )
            return Result.from_error(e)
        logger.info(f"Transferred {amount} from account {from_account_id} to account {to_account_id}")
        return Result.ok(result)

    def transfer_by_player(self, from_player_id: str, to_player_id: str, amount: int) -> Result[dict]:
        """
        Move ``amount`` between two players' main accounts.

        Both main accounts are resolved before failing, so a single
        PLAYER_HAS_NO_ACCOUNT error names every player without one.
        """
        resolved = self.relation_service.get_main_accounts([from_player_id, to_player_id])
        if not resolved:
            logger.warning(f"Player transfer {from_player_id} -> {to_player_id} failed: {resolved.error}")
            return resolved

        accounts = resolved.value
        result = self.transfer(accounts[from_player_id], accounts[to_player_id], amount)
        if result:
            result.value["from_account_id"] = accounts[from_player_id]
            result.value["to_account_id"] = accounts[to_player_id]
        return result
