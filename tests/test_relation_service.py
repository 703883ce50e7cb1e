"""
Tests for RelationService: links, main accounts and the cascade law.
"""

from services import error_codes
from tests.conftest import PLAYER_ALICE, PLAYER_BOB, PLAYER_CAROL


class TestPlayers:
    def test_add_player_upserts_name(self, relation_service):
        relation_service.add_player(PLAYER_ALICE, "Alice")
        relation_service.add_player(PLAYER_ALICE, "AliceRenamed")

        player = relation_service.get_player(PLAYER_ALICE).value
        assert player.display_name == "AliceRenamed"

    def test_find_player_by_name_case_insensitive(self, relation_service):
        relation_service.add_player(PLAYER_BOB, "Bob")
        assert relation_service.find_player_by_name("bOB").value.player_id == PLAYER_BOB
        assert relation_service.find_player_by_name("nobody").value is None

    def test_player_exists_without_accounts(self, relation_service):
        relation_service.add_player(PLAYER_CAROL, "Carol")
        assert relation_service.get_player(PLAYER_CAROL).value is not None
        assert relation_service.get_accounts(PLAYER_CAROL).value == []


class TestRelations:
    def test_link_unknown_account(self, relation_service):
        result = relation_service.create_player_account_relation(PLAYER_ALICE, 999, is_main=True)
        assert result.error_code == error_codes.ACCOUNT_NOT_FOUND

    def test_second_main_account_is_surfaced(self, relation_service, account_service):
        """Linking a second main account fails instead of being ignored."""
        first = account_service.create_account().unwrap()
        second = account_service.create_account().unwrap()
        assert relation_service.create_player_account_relation(PLAYER_ALICE, first, is_main=True)

        result = relation_service.create_player_account_relation(PLAYER_ALICE, second, is_main=True)

        assert not result
        assert result.error_code == error_codes.STORE_ERROR
        assert relation_service.get_main_account(PLAYER_ALICE).value == first

    def test_at_most_one_main_account(self, relation_service, account_service):
        for _ in range(3):
            account_id = account_service.create_account().unwrap()
            relation_service.create_player_account_relation(PLAYER_ALICE, account_id, is_main=True)
            relation_service.create_player_account_relation(PLAYER_ALICE, account_id + 1000, is_main=True)

        mains = [
            account_id
            for account_id in relation_service.get_accounts(PLAYER_ALICE).value
            if relation_service.get_main_account(PLAYER_ALICE).value == account_id
        ]
        assert len(mains) == 1

    def test_get_main_account_missing(self, relation_service):
        result = relation_service.get_main_account(PLAYER_BOB)
        assert result.error_code == error_codes.PLAYER_HAS_NO_ACCOUNT

    def test_get_main_accounts_names_every_missing_player(self, relation_service):
        relation_service.create_account_for_player(PLAYER_ALICE, is_main=True)

        result = relation_service.get_main_accounts([PLAYER_ALICE, PLAYER_BOB, PLAYER_CAROL])

        assert result.error_code == error_codes.PLAYER_HAS_NO_ACCOUNT
        assert PLAYER_BOB in result.error
        assert PLAYER_CAROL in result.error
        assert PLAYER_ALICE not in result.error

    def test_has_account_and_main(self, relation_service):
        account_id = relation_service.create_account_for_player(PLAYER_ALICE, is_main=False).unwrap()
        assert relation_service.has_account(PLAYER_ALICE, account_id).value is True
        assert relation_service.has_account(PLAYER_BOB, account_id).value is False
        assert relation_service.has_main_account(PLAYER_ALICE).value is False

    def test_empty_lists_are_ambiguous(self, relation_service):
        """Unknown entities and entities without links both give []."""
        assert relation_service.get_players(999).value == []
        assert relation_service.get_accounts("never-seen").value == []


class TestCascade:
    def test_removing_only_link_deletes_account(self, relation_service, account_service):
        account_id = relation_service.create_account_for_player(PLAYER_ALICE, is_main=True).unwrap()
        account_service.add_balance(account_id, 100)

        result = relation_service.delete_player_account_relation(PLAYER_ALICE, account_id)

        assert result.value is True
        assert account_service.get_balance(account_id).error_code == error_codes.ACCOUNT_NOT_FOUND

    def test_removing_one_of_two_links_keeps_account(self, relation_service, account_service):
        account_id = relation_service.create_account_for_player(PLAYER_ALICE, is_main=True).unwrap()
        relation_service.create_player_account_relation(PLAYER_BOB, account_id)

        assert relation_service.delete_player_account_relation(PLAYER_ALICE, account_id).value is False
        assert account_service.get_balance(account_id).success
        assert relation_service.get_players(account_id).value == [PLAYER_BOB]

    def test_removing_missing_link(self, relation_service):
        result = relation_service.delete_player_account_relation(PLAYER_ALICE, 12)
        assert result.error_code == error_codes.ACCOUNT_NOT_FOUND

    def test_deleting_account_removes_links(self, relation_service, account_service):
        account_id = relation_service.create_account_for_player(PLAYER_ALICE, is_main=True).unwrap()
        account_service.delete_account(account_id)

        assert relation_service.get_accounts(PLAYER_ALICE).value == []
        assert relation_service.get_main_account(PLAYER_ALICE).error_code == error_codes.PLAYER_HAS_NO_ACCOUNT
