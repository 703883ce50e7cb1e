"""
Pytest fixtures for tests.

Performance optimization: schema creation runs once per session into a
template database; each test copies the template file instead of
re-initializing.

Import the PLAYER_* constants from here instead of defining player IDs
locally in each test file.
"""

import shutil

import pytest

from commands.economy import EconomyCommands
from domain.models.player import Player
from infrastructure.schema_manager import SchemaManager
from repositories.account_repository import AccountRepository
from repositories.link_repository import LinkRepository
from repositories.player_repository import PlayerRepository
from services.account_service import AccountService
from services.join_service import JoinService
from services.leaderboard_service import LeaderboardService
from services.player_service import PlayerService
from services.relation_service import RelationService
from services.transfer_service import TransferService


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

PLAYER_ALICE = "8d7c1d9e-3b53-4c5d-9a3b-1f1c1a5e0a01"
PLAYER_BOB = "2f4b6a71-0c3e-45a9-8f6b-7d2e9c4b1a02"
PLAYER_CAROL = "c0a1e2b3-4d5f-4a6b-8c7d-9e0f1a2b3c03"


@pytest.fixture(scope="session")
def _schema_template_path(tmp_path_factory):
    """Create a schema template database once per test session."""
    template_dir = tmp_path_factory.mktemp("schema_template")
    template_path = str(template_dir / "template.db")
    SchemaManager(template_path).initialize()
    yield template_path


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path (no schema)."""
    path = str(tmp_path / "temp.db")
    yield path


@pytest.fixture
def repo_db_path(_schema_template_path, tmp_path):
    """
    Create a temporary database with initialized schema for repository tests.

    Fast: file copy instead of schema initialization.
    """
    test_db_path = str(tmp_path / "test.db")
    shutil.copy2(_schema_template_path, test_db_path)
    yield test_db_path


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repository(repo_db_path):
    return AccountRepository(repo_db_path)


@pytest.fixture
def player_repository(repo_db_path):
    return PlayerRepository(repo_db_path)


@pytest.fixture
def link_repository(repo_db_path):
    return LinkRepository(repo_db_path)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def account_service(account_repository):
    return AccountService(account_repository)


@pytest.fixture
def relation_service(link_repository, player_repository):
    return RelationService(link_repo=link_repository, player_repo=player_repository)


@pytest.fixture
def transfer_service(account_repository, relation_service):
    return TransferService(account_repo=account_repository, relation_service=relation_service)


@pytest.fixture
def leaderboard_service(player_repository):
    return LeaderboardService(player_repository)


@pytest.fixture
def player_service(account_service, relation_service):
    return PlayerService(account_service=account_service, relation_service=relation_service)


@pytest.fixture
def join_service(relation_service):
    return JoinService(relation_service)


@pytest.fixture
def economy_commands(player_service, relation_service, transfer_service, leaderboard_service):
    """Command dispatcher resolving targets from the cached players table."""
    return EconomyCommands(
        player_service=player_service,
        relation_service=relation_service,
        transfer_service=transfer_service,
        leaderboard_service=leaderboard_service,
        page_size=10,
        currency_symbol="$",
    )


# =============================================================================
# PLAYER FIXTURES
# =============================================================================


@pytest.fixture
def make_player(relation_service, account_service):
    """
    Factory: register a player with a main account and an optional balance.

    Returns the main account ID.
    """

    def _make(player_id: str, name: str, balance: int = 0) -> int:
        relation_service.add_player(player_id, name).unwrap()
        account_id = relation_service.create_account_for_player(player_id, is_main=True).unwrap()
        if balance:
            account_service.set_balance(account_id, balance).unwrap()
        return account_id

    return _make


@pytest.fixture
def alice(make_player):
    """Alice with a main account holding 100.00."""
    account_id = make_player(PLAYER_ALICE, "Alice", balance=10000)
    return Player(PLAYER_ALICE, "Alice"), account_id


@pytest.fixture
def bob(make_player):
    """Bob with an empty main account."""
    account_id = make_player(PLAYER_BOB, "Bob")
    return Player(PLAYER_BOB, "Bob"), account_id
