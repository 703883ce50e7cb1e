"""
Chat commands for the economy plugin.

The host passes the words typed after the root command (``/economy pay Bob
5``) to EconomyCommands.dispatch(). Subcommands are looked up in a
name -> handler table; each handler turns its arguments into ledger calls
and returns the lines to show the sender. No error ever escapes a handler:
failures become a message and abort only that command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from config import BALANCETOP_PAGE_SIZE, COMPLETION_AMOUNTS, CURRENCY_SYMBOL
from domain.models.player import Player
from services import error_codes
from services.leaderboard_service import LeaderboardService
from services.player_service import PlayerService
from services.relation_service import RelationService
from services.result import Result
from services.transfer_service import TransferService
from utils.formatting import format_currency, parse_amount

logger = logging.getLogger("economy.commands")

WILDCARD_PERMISSION = "economy.*"

# Subcommands that need a permission node; the others are open to every player
PERMISSIONS = {
    "set": "economy.set",
    "add": "economy.add",
    "remove": "economy.remove",
    "balancetop": "economy.balancetop",
}

USAGE = {
    "balance": "Usage: /economy balance",
    "pay": "Usage: /economy pay <player> <amount>",
    "set": "Usage: /economy set <player> <amount>",
    "add": "Usage: /economy add <player> <amount>",
    "remove": "Usage: /economy remove <player> <amount>",
    "balancetop": "Usage: /economy balancetop [page]",
}

MSG_NO_PERMISSION = "You don't have permission to use this command"
MSG_PLAYER_ONLY = "This command can only be used by players"
MSG_ERROR_OCCURRED = "An error occurred"
MSG_TARGET_NOT_FOUND = "Target not found"
MSG_INVALID_AMOUNT = "Invalid amount"

# Default user-facing text per error code
ERROR_MESSAGES = {
    error_codes.ACCOUNT_NOT_FOUND: "Account not found",
    error_codes.PLAYER_HAS_NO_ACCOUNT: "Target does not have an account",
    error_codes.INVALID_AMOUNT: "Amount must be positive",
    error_codes.INSUFFICIENT_BALANCE: "Not enough balance",
    error_codes.BALANCE_LIMIT_EXCEEDED: "That would exceed the maximum balance",
    error_codes.VALIDATION_ERROR: MSG_INVALID_AMOUNT,
    error_codes.STORE_ERROR: MSG_ERROR_OCCURRED,
}


@dataclass(frozen=True)
class CommandSender:
    """Who typed the command. ``player_id`` is None for the server console."""

    name: str
    player_id: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_player(self) -> bool:
        return self.player_id is not None

    def has_permission(self, node: str) -> bool:
        return WILDCARD_PERMISSION in self.permissions or node in self.permissions


@dataclass
class CommandResponse:
    """Outcome of one command: whether it ran, and the lines to send back."""

    success: bool
    messages: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, *messages: str) -> "CommandResponse":
        return cls(True, list(messages))

    @classmethod
    def fail(cls, *messages: str) -> "CommandResponse":
        return cls(False, list(messages))


Handler = Callable[[CommandSender, list[str]], CommandResponse]


def error_message(result: Result, overrides: dict[str, str] | None = None) -> str:
    """Pick the user-facing message for a failed Result."""
    if overrides and result.error_code in overrides:
        return overrides[result.error_code]
    return ERROR_MESSAGES.get(result.error_code, MSG_ERROR_OCCURRED)


class EconomyCommands:
    """
    Dispatch table for the /economy subcommands.

    Args:
        resolve_player: host lookup from a typed name to a Player; defaults
            to the cached names in the players table
        online_player_names: host callable used for tab completion
    """

    def __init__(
        self,
        player_service: PlayerService,
        relation_service: RelationService,
        transfer_service: TransferService,
        leaderboard_service: LeaderboardService,
        resolve_player: Callable[[str], Player | None] | None = None,
        online_player_names: Callable[[], list[str]] | None = None,
        page_size: int = BALANCETOP_PAGE_SIZE,
        currency_symbol: str = CURRENCY_SYMBOL,
    ):
        self.player_service = player_service
        self.relation_service = relation_service
        self.transfer_service = transfer_service
        self.leaderboard_service = leaderboard_service
        self.resolve_player = resolve_player or self._resolve_cached_player
        self.online_player_names = online_player_names or self._cached_player_names
        self.page_size = page_size
        self.currency_symbol = currency_symbol

        self.handlers: dict[str, Handler] = {
            "balance": self._balance,
            "pay": self._pay,
            "set": self._set,
            "add": self._add,
            "remove": self._remove,
            "balancetop": self._balancetop,
        }

    # =========================================================================
    # Entry points
    # =========================================================================

    def dispatch(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        """Run the subcommand named by ``args[0]`` with the remaining args."""
        if not args:
            return CommandResponse.fail(self._general_usage())

        name = args[0].lower()
        handler = self.handlers.get(name)
        if handler is None:
            return CommandResponse.fail(self._general_usage())

        node = PERMISSIONS.get(name)
        if node and not sender.has_permission(node):
            return CommandResponse.fail(MSG_NO_PERMISSION)

        logger.debug(f"{sender.name} ran economy {name} {args[1:]}")
        return handler(sender, args[1:])

    def complete(self, sender: CommandSender, args: list[str]) -> list[str]:
        """Tab completion for the partially typed ``args``."""
        if len(args) <= 1:
            prefix = args[0].lower() if args else ""
            return sorted(
                name
                for name in self.handlers
                if name.startswith(prefix) and self._can_use(sender, name)
            )

        name = args[0].lower()
        if name not in ("pay", "set", "add", "remove") or not self._can_use(sender, name):
            return []
        if len(args) == 2:
            prefix = args[1].lower()
            return [n for n in self.online_player_names() if n.lower().startswith(prefix)]
        if len(args) == 3:
            return list(COMPLETION_AMOUNTS)
        return []

    # =========================================================================
    # Handlers
    # =========================================================================

    def _balance(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        if not sender.is_player:
            return CommandResponse.fail(MSG_PLAYER_ONLY)
        if args:
            return CommandResponse.fail(USAGE["balance"])

        result = self.player_service.get_player_balance(sender.player_id)
        if not result:
            return CommandResponse.fail(
                error_message(result, {error_codes.PLAYER_HAS_NO_ACCOUNT: "You do not have an account"})
            )
        return CommandResponse.ok(f"Your balance is {self._money(result.value)}")

    def _pay(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        if not sender.is_player:
            return CommandResponse.fail(MSG_PLAYER_ONLY)
        parsed = self._parse_target_and_amount("pay", args)
        if isinstance(parsed, CommandResponse):
            return parsed
        target, amount = parsed

        if target.player_id == sender.player_id:
            return CommandResponse.fail("You cannot transfer money to yourself")

        result = self.transfer_service.transfer_by_player(sender.player_id, target.player_id, amount)
        if not result:
            return CommandResponse.fail(
                error_message(
                    result,
                    {
                        error_codes.ACCOUNT_NOT_FOUND: MSG_TARGET_NOT_FOUND,
                        error_codes.PLAYER_HAS_NO_ACCOUNT: MSG_TARGET_NOT_FOUND,
                        error_codes.INSUFFICIENT_BALANCE: "You do not have enough balance",
                    },
                )
            )
        return CommandResponse.ok(f"{self._money(amount)} transferred to {target.display_name}")

    def _set(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        parsed = self._parse_target_and_amount("set", args)
        if isinstance(parsed, CommandResponse):
            return parsed
        target, amount = parsed

        result = self.player_service.set_player_balance(target.player_id, amount)
        if not result:
            return CommandResponse.fail(error_message(result, self._target_overrides()))
        logger.info(f"{sender.name} set the balance of {target.display_name} to {amount}")
        return CommandResponse.ok(f"Balance of {target.display_name} set to {self._money(amount)}")

    def _add(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        parsed = self._parse_target_and_amount("add", args)
        if isinstance(parsed, CommandResponse):
            return parsed
        target, amount = parsed

        result = self.player_service.add_player_balance(target.player_id, amount)
        if not result:
            return CommandResponse.fail(error_message(result, self._target_overrides()))
        return CommandResponse.ok(f"Added {self._money(amount)} to {target.display_name}")

    def _remove(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        parsed = self._parse_target_and_amount("remove", args)
        if isinstance(parsed, CommandResponse):
            return parsed
        target, amount = parsed

        overrides = self._target_overrides()
        overrides[error_codes.INSUFFICIENT_BALANCE] = f"{target.display_name} does not have enough balance"
        result = self.player_service.remove_player_balance(target.player_id, amount)
        if not result:
            return CommandResponse.fail(error_message(result, overrides))
        return CommandResponse.ok(f"Removed {self._money(amount)} from {target.display_name}")

    def _balancetop(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        if len(args) > 1:
            return CommandResponse.fail(USAGE["balancetop"])
        page = 1
        if args:
            try:
                page = int(args[0])
            except ValueError:
                return CommandResponse.fail(USAGE["balancetop"])
            if page < 1:
                return CommandResponse.fail(USAGE["balancetop"])

        result = self.leaderboard_service.get_top_accounts(self.page_size, (page - 1) * self.page_size)
        if not result:
            return CommandResponse.fail(error_message(result))

        entries = result.value
        if not entries:
            return CommandResponse.ok("No accounts to show")

        width = max(len(entry.display_name) for entry in entries)
        first_rank = (page - 1) * self.page_size + 1
        lines = [
            f"{rank}. {entry.display_name.ljust(width)} - {self._money(entry.balance)}"
            for rank, entry in enumerate(entries, start=first_rank)
        ]
        return CommandResponse.ok(*lines)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _parse_target_and_amount(self, name: str, args: list[str]) -> tuple[Player, int] | CommandResponse:
        if len(args) != 2:
            return CommandResponse.fail(USAGE[name])

        try:
            amount = parse_amount(args[1])
        except ValueError:
            return CommandResponse.fail(MSG_INVALID_AMOUNT)

        target = self.resolve_player(args[0])
        if target is None:
            return CommandResponse.fail(MSG_TARGET_NOT_FOUND)
        return target, amount

    @staticmethod
    def _target_overrides() -> dict[str, str]:
        return {
            error_codes.ACCOUNT_NOT_FOUND: MSG_TARGET_NOT_FOUND,
            error_codes.PLAYER_HAS_NO_ACCOUNT: "Target does not have an account",
        }

    def _can_use(self, sender: CommandSender, name: str) -> bool:
        node = PERMISSIONS.get(name)
        return node is None or sender.has_permission(node)

    def _general_usage(self) -> str:
        return "Usage: /economy <" + "|".join(self.handlers) + ">"

    def _money(self, amount: int) -> str:
        return format_currency(amount, self.currency_symbol)

    def _resolve_cached_player(self, name: str) -> Player | None:
        result = self.relation_service.find_player_by_name(name)
        if not result:
            logger.warning(f"Player lookup for {name!r} failed: {result.error}")
            return None
        return result.value

    def _cached_player_names(self) -> list[str]:
        return self.relation_service.get_player_names().unwrap_or([])
