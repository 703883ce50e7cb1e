"""
Service container for dependency injection and initialization.

This module centralizes creation and wiring of the ledger's repositories,
services and command dispatcher. The plugin owns exactly one container,
created on enable and closed on disable; nothing here is global.

Usage:
    container = ServiceContainer(ServiceConfig(db_path="economy.db"))
    container.initialize()

    transfer_service = container.transfer_service
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from commands.economy import EconomyCommands
    from domain.models.player import Player
    from services.account_service import AccountService
    from services.join_service import JoinService
    from services.leaderboard_service import LeaderboardService
    from services.player_service import PlayerService
    from services.relation_service import RelationService
    from services.transfer_service import TransferService

import config
from infrastructure.schema_manager import SchemaManager

# Repositories
from repositories.account_repository import AccountRepository
from repositories.link_repository import LinkRepository
from repositories.player_repository import PlayerRepository

logger = logging.getLogger("economy.infrastructure.container")


@dataclass
class RepositoryContainer:
    """Container for all repositories."""

    account: AccountRepository | None = None
    player: PlayerRepository | None = None
    link: LinkRepository | None = None


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Database
    db_path: str = config.DB_PATH

    # Join handling
    auto_create_main_account: bool = config.AUTO_CREATE_MAIN_ACCOUNT

    # Command display
    currency_symbol: str = config.CURRENCY_SYMBOL
    balancetop_page_size: int = config.BALANCETOP_PAGE_SIZE


class ServiceContainer:
    """
    Central container for all ledger services.

    Handles proper initialization order and dependency injection.
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        resolve_player: "Callable[[str], Player | None] | None" = None,
        online_player_names: Callable[[], list[str]] | None = None,
    ):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
            resolve_player: Host lookup from typed name to Player for commands
            online_player_names: Host callable for tab completion
        """
        self.config = config or ServiceConfig()
        self._resolve_player = resolve_player
        self._online_player_names = online_player_names
        self._initialized = False
        self._repos = RepositoryContainer()
        self._services: dict[str, Any] = {}

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    def initialize(self) -> None:
        """
        Initialize schema, repositories and services in order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        self._init_database()
        self._init_repositories()
        self._init_ledger_services()
        self._init_host_services()

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def close(self) -> None:
        """
        Release services and repositories.

        Repositories open a connection per operation, so there is no pooled
        connection to close; dropping the references is enough.
        """
        if not self._initialized:
            return
        self._services.clear()
        self._repos = RepositoryContainer()
        self._initialized = False
        logger.info("ServiceContainer closed")

    def _init_database(self) -> None:
        """Create the store and apply migrations."""
        logger.debug(f"Initializing database at {self.config.db_path}")
        SchemaManager(self.config.db_path).initialize()

    def _init_repositories(self) -> None:
        logger.debug("Initializing repositories")

        db_path = self.config.db_path
        self._repos.account = AccountRepository(db_path)
        self._repos.player = PlayerRepository(db_path)
        self._repos.link = LinkRepository(db_path)

    def _init_ledger_services(self) -> None:
        logger.debug("Initializing ledger services")

        from services.account_service import AccountService
        from services.leaderboard_service import LeaderboardService
        from services.player_service import PlayerService
        from services.relation_service import RelationService
        from services.transfer_service import TransferService

        self._services["account"] = AccountService(self._repos.account)
        self._services["relation"] = RelationService(
            link_repo=self._repos.link,
            player_repo=self._repos.player,
        )
        self._services["transfer"] = TransferService(
            account_repo=self._repos.account,
            relation_service=self._services["relation"],
        )
        self._services["leaderboard"] = LeaderboardService(self._repos.player)
        self._services["player"] = PlayerService(
            account_service=self._services["account"],
            relation_service=self._services["relation"],
        )

    def _init_host_services(self) -> None:
        """Join handling and the command dispatcher."""
        logger.debug("Initializing host-facing services")

        from commands.economy import EconomyCommands
        from services.join_service import JoinService

        self._services["join"] = JoinService(
            relation_service=self._services["relation"],
            auto_create_main_account=self.config.auto_create_main_account,
        )
        self._services["commands"] = EconomyCommands(
            player_service=self._services["player"],
            relation_service=self._services["relation"],
            transfer_service=self._services["transfer"],
            leaderboard_service=self._services["leaderboard"],
            resolve_player=self._resolve_player,
            online_player_names=self._online_player_names,
            page_size=self.config.balancetop_page_size,
            currency_symbol=self.config.currency_symbol,
        )

    # =========================================================================
    # Service accessors
    # =========================================================================

    @property
    def account_repo(self) -> AccountRepository:
        return self._repos.account

    @property
    def player_repo(self) -> PlayerRepository:
        return self._repos.player

    @property
    def link_repo(self) -> LinkRepository:
        return self._repos.link

    @property
    def account_service(self) -> "AccountService | None":
        return self._services.get("account")

    @property
    def relation_service(self) -> "RelationService | None":
        return self._services.get("relation")

    @property
    def transfer_service(self) -> "TransferService | None":
        return self._services.get("transfer")

    @property
    def leaderboard_service(self) -> "LeaderboardService | None":
        return self._services.get("leaderboard")

    @property
    def player_service(self) -> "PlayerService | None":
        return self._services.get("player")

    @property
    def join_service(self) -> "JoinService | None":
        return self._services.get("join")

    @property
    def commands(self) -> "EconomyCommands | None":
        return self._services.get("commands")
