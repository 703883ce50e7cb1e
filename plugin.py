"""
Economy plugin entry point.

The host game server constructs one EconomyPlugin, calls enable() on start
and disable() on shutdown, and forwards join events and /economy commands.
"""

from __future__ import annotations

import logging
from typing import Callable

import config
from commands.economy import CommandResponse, CommandSender
from domain.models.player import Player
from infrastructure.service_container import ServiceConfig, ServiceContainer
from services.result import Result

logger = logging.getLogger("economy")


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Configure root logging for standalone runs of the plugin."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,  # Override any handlers the host installed first
    )


class EconomyPlugin:
    """
    Owns the ledger for the lifetime of the host plugin.

    All state lives in the ServiceContainer created by enable(); there is no
    module-level instance.
    """

    def __init__(
        self,
        service_config: ServiceConfig | None = None,
        resolve_player: Callable[[str], Player | None] | None = None,
        online_player_names: Callable[[], list[str]] | None = None,
    ):
        self.service_config = service_config or ServiceConfig()
        self._resolve_player = resolve_player
        self._online_player_names = online_player_names
        self._container: ServiceContainer | None = None

    @property
    def container(self) -> ServiceContainer:
        if self._container is None:
            raise RuntimeError("Economy plugin is not enabled")
        return self._container

    @property
    def enabled(self) -> bool:
        return self._container is not None

    def enable(self) -> None:
        if self._container is not None:
            return
        container = ServiceContainer(
            self.service_config,
            resolve_player=self._resolve_player,
            online_player_names=self._online_player_names,
        )
        container.initialize()
        self._container = container
        logger.info(f"Economy enabled (store: {self.service_config.db_path})")

    def disable(self) -> None:
        if self._container is None:
            return
        self._container.close()
        self._container = None
        logger.info("Economy disabled")

    def on_player_join(self, player_id: str, display_name: str) -> Result[int | None]:
        """Join-event hook: register the player and open a main account if needed."""
        return self.container.join_service.on_player_join(player_id, display_name)

    def dispatch(self, sender: CommandSender, args: list[str]) -> CommandResponse:
        """Run an /economy subcommand. Unexpected failures are logged, never raised."""
        try:
            return self.container.commands.dispatch(sender, args)
        except Exception:
            logger.error(f"Unhandled error running economy command {args!r} for {sender.name}", exc_info=True)
            return CommandResponse.fail("An error occurred")

    def complete(self, sender: CommandSender, args: list[str]) -> list[str]:
        return self.container.commands.complete(sender, args)
