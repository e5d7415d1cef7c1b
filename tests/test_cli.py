import pytest

from connect4net.errors import MoveSourceError, SetupError
from connect4net.game.dispatcher import OutcomeKind
from connect4net.interfaces.cli import (INVALID_CHOICE, WIDE_BOARD_WARNING, ServerCLI,
                                        select_board_size, select_game_mode)
from connect4net.utils import GameMode

from conftest import console_output, make_console


@pytest.mark.parametrize("choice,expected", [
    ("1", (6, 8)),
    ("2", (7, 6)),
    ("3", (14, 9)),
])
def test_board_presets(choice, expected):
    console = make_console(choice + "\n")
    assert select_board_size(console) == expected


def test_invalid_menu_choice_reprompts():
    console = make_console("x\n7\n2\n")
    assert select_board_size(console) == (7, 6)
    assert console_output(console).count(INVALID_CHOICE) == 2
    assert console_output(console).count("Select Board Size:") == 3


def test_custom_size_columns_first():
    console = make_console("4\n12\n10\n")
    assert select_board_size(console) == (10, 12)
    assert WIDE_BOARD_WARNING in console_output(console)


def test_custom_size_out_of_range_reprompts():
    console = make_console("4\n3\n10\n4\n5\n21\n4\n5\n4\n")
    assert select_board_size(console) == (4, 5)
    output = console_output(console)
    assert output.count("Invalid board size.") == 2
    assert WIDE_BOARD_WARNING not in output


def test_select_game_mode():
    console = make_console("0\n3\n")
    assert select_game_mode(console) == GameMode.SERVER_VS_COMPUTER
    output = console_output(console)
    assert "4. Client vs Computer" in output
    assert INVALID_CHOICE in output


def test_closed_input_during_setup():
    with pytest.raises(MoveSourceError):
        select_game_mode(make_console(""))


def test_configure_uses_given_values_without_prompting():
    cli = ServerCLI(console=make_console(""))
    assert cli.configure(6, 7, GameMode.CLIENT_VS_CLIENT) == (6, 7, GameMode.CLIENT_VS_CLIENT)


def test_configure_rejects_invalid_size():
    cli = ServerCLI(console=make_console(""))
    with pytest.raises(SetupError):
        cli.configure(6, 30, GameMode.CLIENT_VS_CLIENT)


def test_configure_asks_for_missing_mode():
    cli = ServerCLI(console=make_console("4\n"))
    assert cli.configure(6, 7) == (6, 7, GameMode.CLIENT_VS_COMPUTER)


def test_run_server_vs_computer_to_the_end():
    # Plenty of input: full columns and re-prompts consume extra lines
    moves = "".join(f"{c}\n" for c in list(range(1, 8)) * 30)
    console = make_console("3\n" + moves)
    cli = ServerCLI(console=console, seed=3)

    outcome = cli.run(rows=6, columns=7)

    assert outcome.kind in (OutcomeKind.WIN, OutcomeKind.DRAW)
    output = console_output(console)
    assert "Server started" not in output
    assert "Computer (Player 2) chooses column" in output
