"""
Join-event handling: register players and open their main account.
"""

import logging

from services import error_codes
from services.relation_service import RelationService
from services.result import Result

logger = logging.getLogger("economy.services.join")


class JoinService:
    """
    Called by the host when a player connects.

    PLAYER_HAS_NO_ACCOUNT from the main-account lookup is the normal
    first-join signal. Any other failure is logged and returned; nothing
    here raises into the host.
    """

    def __init__(self, relation_service: RelationService, auto_create_main_account: bool = True):
        self.relation_service = relation_service
        self.auto_create_main_account = auto_create_main_account

    def on_player_join(self, player_id: str, display_name: str) -> Result[int | None]:
        """
        Record the player and make sure they have a main account.

        Returns:
            Result.ok(account_id) if a main account was created,
            Result.ok(None) if the player already had one (or auto-creation is off)
        """
        registered = self.relation_service.add_player(player_id, display_name)
        if not registered:
            logger.error(f"Could not register joining player {display_name} ({player_id}): {registered.error}")
            return registered

        main = self.relation_service.get_main_account(player_id)
        if main:
            return Result.ok(None)
        if main.error_code != error_codes.PLAYER_HAS_NO_ACCOUNT:
            logger.error(f"Main account lookup failed for {display_name} ({player_id}): {main.error}")
            return main
        if not self.auto_create_main_account:
            return Result.ok(None)

        created = self.relation_service.create_account_for_player(player_id, is_main=True)
        if not created:
            logger.error(f"Could not create main account for {display_name} ({player_id}): {created.error}")
            return created

        logger.info(f"Opened main account {created.value} for first-time player {display_name}")
        return created
