import pytest

from connect4net.errors import SetupError
from connect4net.game.session import MODE_TABLE, GameSession
from connect4net.game.sources import SourceKind
from connect4net.utils import GameMode, Player

from conftest import FakeTransport, make_console


@pytest.mark.parametrize("mode,transports,kinds,order", [
    (GameMode.SERVER_VS_CLIENT, 1, (SourceKind.LOCAL, SourceKind.TRANSPORT), (2,)),
    (GameMode.CLIENT_VS_CLIENT, 2, (SourceKind.TRANSPORT, SourceKind.TRANSPORT), (1, 2)),
    (GameMode.SERVER_VS_COMPUTER, 0, (SourceKind.LOCAL, SourceKind.SCRIPTED), ()),
    (GameMode.CLIENT_VS_COMPUTER, 1, (SourceKind.TRANSPORT, SourceKind.SCRIPTED), (1,)),
])
def test_mode_table(mode, transports, kinds, order):
    spec = MODE_TABLE[mode]
    assert spec.transports == transports
    assert (spec.slot(Player.ONE).kind, spec.slot(Player.TWO).kind) == kinds
    assert spec.connection_order() == order
    assert spec.networked == (transports > 0)


def test_only_the_computer_turn_is_silent():
    for mode, spec in MODE_TABLE.items():
        for player in (Player.ONE, Player.TWO):
            slot = spec.slot(player)
            assert slot.turn_notice == (slot.kind != SourceKind.SCRIPTED), (mode, player)


def test_every_mode_has_a_table_entry():
    assert set(MODE_TABLE) == set(GameMode)


def test_session_maps_transports_to_player_slots():
    t1, t2 = FakeTransport("t1"), FakeTransport("t2")
    session = GameSession(6, 7, GameMode.CLIENT_VS_CLIENT, [t1, t2], make_console())
    assert session.source_for(Player.ONE).transport is t1
    assert session.source_for(Player.TWO).transport is t2
    assert session.notification_targets() == (t1, t2)


def test_server_vs_client_uses_first_transport_for_player_two():
    t1 = FakeTransport("t1")
    session = GameSession(6, 7, GameMode.SERVER_VS_CLIENT, [t1], make_console())
    assert session.source_for(Player.ONE).kind == SourceKind.LOCAL
    assert session.source_for(Player.TWO).transport is t1


@pytest.mark.parametrize("mode,count", [
    (GameMode.SERVER_VS_CLIENT, 0),
    (GameMode.CLIENT_VS_CLIENT, 1),
    (GameMode.SERVER_VS_COMPUTER, 1),
    (GameMode.CLIENT_VS_COMPUTER, 2),
])
def test_wrong_transport_count_is_a_setup_error(mode, count):
    transports = [FakeTransport(f"t{i}") for i in range(count)]
    with pytest.raises(SetupError):
        GameSession(6, 7, mode, transports, make_console())


def test_invalid_board_size_is_a_setup_error():
    with pytest.raises(SetupError):
        GameSession(3, 7, GameMode.SERVER_VS_COMPUTER, (), make_console())


def test_close_closes_every_transport():
    t1, t2 = FakeTransport("t1"), FakeTransport("t2")
    session = GameSession(6, 7, GameMode.CLIENT_VS_CLIENT, [t1, t2], make_console())
    session.close()
    assert t1.closed and t2.closed


def test_game_mode_lookup():
    assert GameMode.from_string("client-vs-computer") == GameMode.CLIENT_VS_COMPUTER
    assert GameMode.from_string("SERVER_VS_CLIENT") == GameMode.SERVER_VS_CLIENT
    assert GameMode.CLIENT_VS_CLIENT.title == "Client vs Client"
    with pytest.raises(ValueError):
        GameMode.from_string("spectator")
