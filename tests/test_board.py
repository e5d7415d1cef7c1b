import random

import numpy as np
import pytest

from connect4net.errors import SetupError
from connect4net.game.board import Board, validate_board_size
from connect4net.utils import Player

# 4x4 board, full, no four in a row for either player (row 0 on top)
DRAW_PATTERN = [
    [Player.ONE, Player.ONE, Player.TWO, Player.TWO],
    [Player.TWO, Player.TWO, Player.ONE, Player.ONE],
    [Player.ONE, Player.ONE, Player.TWO, Player.TWO],
    [Player.TWO, Player.TWO, Player.ONE, Player.ONE],
]


def assert_gravity(board):
    occupied = board.grid != Player.EMPTY.value
    # Top to bottom each column reads empty...empty, occupied...occupied
    assert np.all(np.diff(occupied.astype(int), axis=0) >= 0)


def fill_draw_board():
    board = Board(4, 4)
    for row in range(3, -1, -1):
        for col in range(4):
            assert board.drop_piece(col, DRAW_PATTERN[row][col])
    return board


def test_new_board_is_empty():
    board = Board(6, 7)
    assert board.grid.shape == (6, 7)
    assert not board.grid.any()
    assert board.moves_made == 0
    assert board.get_valid_moves() == list(range(7))


@pytest.mark.parametrize("rows,columns", [(3, 7), (6, 3), (21, 7), (6, 21), (0, 0)])
def test_board_size_outside_range_is_rejected(rows, columns):
    with pytest.raises(SetupError):
        Board(rows, columns)


def test_board_size_limits_are_inclusive():
    validate_board_size(4, 4)
    validate_board_size(20, 20)
    assert Board(4, 20).columns == 20


def test_drop_piece_stacks_from_the_bottom():
    board = Board(6, 7)
    assert board.drop_piece(3, Player.ONE)
    assert board.drop_piece(3, Player.TWO)
    assert board.grid[5, 3] == Player.ONE.value
    assert board.grid[4, 3] == Player.TWO.value
    assert board.last_move == (4, 3)
    assert board.moves_made == 2


def test_gravity_holds_after_random_drops():
    rng = random.Random(7)
    for _ in range(50):
        board = Board(rng.randint(4, 20), rng.randint(4, 20))
        player = Player.ONE
        for _ in range(rng.randint(0, board.rows * board.columns)):
            board.drop_piece(rng.randrange(board.columns), player)
            player = player.other()
        assert_gravity(board)


def test_drop_on_full_column_fails_without_mutation():
    board = Board(4, 5)
    for player in (Player.ONE, Player.TWO, Player.ONE, Player.TWO):
        assert board.drop_piece(2, player)
    before = board.get_state()

    assert not board.drop_piece(2, Player.ONE)
    assert np.array_equal(board.grid, before)
    assert board.moves_made == 4
    assert not board.is_valid_move(2)


@pytest.mark.parametrize("column", [-1, 7])
def test_drop_outside_board_is_a_contract_violation(column):
    board = Board(6, 7)
    with pytest.raises(IndexError):
        board.drop_piece(column, Player.ONE)
    assert not board.grid.any()


def test_horizontal_four_wins_only_for_owner():
    board = Board(6, 7)
    board.grid[2, 1:5] = Player.ONE.value
    assert board.has_four_in_a_row(Player.ONE)
    assert not board.has_four_in_a_row(Player.TWO)
    assert board.get_winning_line(Player.ONE) == [(2, 1), (2, 2), (2, 3), (2, 4)]


def test_vertical_four():
    board = Board(6, 7)
    for _ in range(4):
        board.drop_piece(0, Player.TWO)
    assert board.has_four_in_a_row(Player.TWO)
    assert not board.has_four_in_a_row(Player.ONE)


def test_diagonal_up_four():
    board = Board(6, 7)
    for i in range(4):
        board.grid[5 - i, 2 + i] = Player.ONE.value
    assert board.has_four_in_a_row(Player.ONE)
    assert board.get_winning_line(Player.ONE) == [(5, 2), (4, 3), (3, 4), (2, 5)]


def test_diagonal_down_four():
    board = Board(6, 7)
    for i in range(4):
        board.grid[1 + i, 3 + i] = Player.TWO.value
    assert board.has_four_in_a_row(Player.TWO)


def test_three_or_broken_lines_do_not_win():
    board = Board(6, 7)
    board.grid[5, 0:3] = Player.ONE.value
    board.grid[4, [0, 1, 3, 4]] = Player.ONE.value
    for i in range(3):
        board.grid[2 - i, 4 + i] = Player.ONE.value
    assert not board.has_four_in_a_row(Player.ONE)
    assert board.get_winning_line(Player.ONE) == []


def test_longer_run_still_wins():
    board = Board(6, 7)
    board.grid[5, :] = Player.ONE.value
    assert board.has_four_in_a_row(Player.ONE)


def test_full_4x4_board_without_winner_is_a_draw():
    board = fill_draw_board()
    assert board.is_full()
    assert not board.has_four_in_a_row(Player.ONE)
    assert not board.has_four_in_a_row(Player.TWO)
    assert board.get_valid_moves() == []


def test_is_full_only_when_top_row_is_filled():
    board = Board(4, 4)
    for row in range(3, -1, -1):
        for col in range(4):
            assert not board.is_full()
            board.drop_piece(col, DRAW_PATTERN[row][col])
    assert board.is_full()


def test_only_the_mover_can_create_a_win():
    rng = random.Random(11)
    for _ in range(200):
        board = Board(6, 7)
        player = Player.ONE
        while not board.is_full():
            column = rng.choice(board.get_valid_moves())
            board.drop_piece(column, player)
            assert not board.has_four_in_a_row(player.other())
            if board.has_four_in_a_row(player):
                break
            player = player.other()


def test_render_empty_board():
    board = Board(4, 5)
    expected = "\n" + ". . . . . \n" * 4 + "1 2 3 4 5 \n\n"
    assert board.render() == expected
    assert str(board) == expected


def test_render_shows_markers():
    board = Board(4, 4)
    board.drop_piece(0, Player.ONE)
    board.drop_piece(1, Player.TWO)
    lines = board.render().split("\n")
    assert lines[0] == ""
    assert lines[4] == "X O . . "
    assert lines[5] == "1 2 3 4 "


def test_get_state_is_independent():
    board = Board(5, 5)
    board.drop_piece(1, Player.ONE)
    state = board.get_state()
    state[3, 1] = Player.TWO.value
    assert board.grid[4, 1] == Player.ONE.value
    assert board.grid[3, 1] == Player.EMPTY.value
    assert board.moves_made == 1
