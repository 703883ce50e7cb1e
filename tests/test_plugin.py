"""Tests for the EconomyPlugin lifecycle and host hooks."""

import pytest

from commands.economy import CommandSender
from infrastructure.service_container import ServiceConfig
from plugin import EconomyPlugin
from tests.conftest import PLAYER_ALICE, PLAYER_BOB


@pytest.fixture
def plugin(tmp_path):
    plugin = EconomyPlugin(ServiceConfig(db_path=str(tmp_path / "database.db")))
    plugin.enable()
    yield plugin
    plugin.disable()


def test_disabled_plugin_has_no_container(tmp_path):
    plugin = EconomyPlugin(ServiceConfig(db_path=str(tmp_path / "database.db")))

    assert not plugin.enabled
    with pytest.raises(RuntimeError, match="not enabled"):
        plugin.container


def test_enable_disable(tmp_path):
    plugin = EconomyPlugin(ServiceConfig(db_path=str(tmp_path / "database.db")))
    plugin.enable()
    container = plugin.container

    plugin.enable()  # no-op
    assert plugin.container is container

    plugin.disable()
    assert not plugin.enabled
    plugin.disable()  # no-op


def test_join_then_pay(plugin):
    plugin.on_player_join(PLAYER_ALICE, "Alice")
    plugin.on_player_join(PLAYER_BOB, "Bob")
    plugin.container.player_service.set_player_balance(PLAYER_ALICE, 5000)

    alice = CommandSender("Alice", PLAYER_ALICE)
    response = plugin.dispatch(alice, ["pay", "Bob", "20"])

    assert response.success
    assert response.messages == ["$20,00 transferred to Bob"]
    assert plugin.container.player_service.get_player_balance(PLAYER_BOB).value == 2000


def test_dispatch_never_raises(plugin, monkeypatch, caplog):
    def _explode(sender, args):
        raise RuntimeError("boom")

    monkeypatch.setitem(plugin.container.commands.handlers, "balance", _explode)

    with caplog.at_level("ERROR", logger="economy"):
        response = plugin.dispatch(CommandSender("Alice", PLAYER_ALICE), ["balance"])

    assert not response.success
    assert response.messages == ["An error occurred"]
    assert "Unhandled error" in caplog.text


def test_complete_delegates(plugin):
    assert plugin.complete(CommandSender("Alice", PLAYER_ALICE), ["ba"]) == ["balance"]


def test_host_resolver_is_used(tmp_path):
    from domain.models.player import Player

    plugin = EconomyPlugin(
        ServiceConfig(db_path=str(tmp_path / "database.db")),
        resolve_player=lambda name: Player(PLAYER_BOB, "Bob") if name == "bobby" else None,
    )
    plugin.enable()
    try:
        plugin.on_player_join(PLAYER_BOB, "Bob")
        admin = CommandSender("console", permissions=frozenset({"economy.*"}))

        response = plugin.dispatch(admin, ["add", "bobby", "1"])

        assert response.success
        assert plugin.container.player_service.get_player_balance(PLAYER_BOB).value == 100
    finally:
        plugin.disable()
