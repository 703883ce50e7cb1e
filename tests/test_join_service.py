"""
Tests for JoinService first-join handling.
"""

from services import error_codes
from services.join_service import JoinService
from tests.conftest import PLAYER_ALICE, PLAYER_BOB


def test_first_join_opens_main_account(join_service, relation_service, account_service):
    result = join_service.on_player_join(PLAYER_ALICE, "Alice")

    assert result.success
    account_id = result.value
    assert relation_service.get_main_account(PLAYER_ALICE).value == account_id
    assert account_service.get_balance(account_id).value == 0
    assert relation_service.get_player(PLAYER_ALICE).value.display_name == "Alice"


def test_rejoin_keeps_existing_account(join_service, relation_service):
    first = join_service.on_player_join(PLAYER_ALICE, "Alice").value

    again = join_service.on_player_join(PLAYER_ALICE, "AliceNewName")

    assert again.success
    assert again.value is None
    assert relation_service.get_accounts(PLAYER_ALICE).value == [first]
    assert relation_service.get_player(PLAYER_ALICE).value.display_name == "AliceNewName"


def test_auto_create_disabled(relation_service):
    service = JoinService(relation_service, auto_create_main_account=False)

    result = service.on_player_join(PLAYER_BOB, "Bob")

    assert result.success
    assert result.value is None
    assert relation_service.get_main_account(PLAYER_BOB).error_code == error_codes.PLAYER_HAS_NO_ACCOUNT


def test_store_failure_is_returned_not_raised(join_service, monkeypatch):
    import sqlite3

    def _broken():
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(join_service.relation_service.player_repo, "get_connection", _broken)

    result = join_service.on_player_join(PLAYER_ALICE, "Alice")

    assert not result
    assert result.error_code == error_codes.STORE_ERROR
