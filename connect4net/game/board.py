"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class: a rows x columns grid with gravity-based
placement, the four-direction win scan and the draw check.
"""

import numpy as np
from typing import List

from connect4net.debug import debug
from connect4net.errors import SetupError
from connect4net.utils import (MIN_BOARD_SIZE, MAX_BOARD_SIZE, Coord, Direction,
                               Player, iter_windows, render_board_ascii)


def validate_board_size(rows: int, columns: int) -> None:
    """
    Check that both board dimensions lie in [MIN_BOARD_SIZE, MAX_BOARD_SIZE].

    Raises:
        SetupError: If either dimension is out of range
    """
    for name, value in (("rows", rows), ("columns", columns)):
        if not MIN_BOARD_SIZE <= value <= MAX_BOARD_SIZE:
            raise SetupError(
                f"Invalid board size: {name} must be between "
                f"{MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {value}"
            )


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top row. Pieces fill each column bottom-up, so a cell above an
    empty cell is always empty. The grid is only mutated by drop_piece.
    """

    def __init__(self, rows: int, columns: int):
        """
        Initialize an empty board.

        Args:
            rows: Number of rows
            columns: Number of columns

        Raises:
            SetupError: If the size is outside the supported range
        """
        validate_board_size(rows, columns)
        debug.debug(f"Initializing new {rows}x{columns} Board", "board")
        self.rows = rows
        self.columns = columns
        self.grid = np.zeros((rows, columns), dtype=int)
        self.moves_made = 0
        self.last_move = None

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a piece can be dropped into a column.

        Args:
            column: The column to check (0-indexed)

        Returns:
            True if the column is on the board and not full
        """
        if not (0 <= column < self.columns):
            return False
        return self.grid[0, column] == Player.EMPTY.value

    def get_valid_moves(self) -> List[int]:
        """Get the 0-indexed columns that still have room."""
        return [col for col in range(self.columns) if self.is_valid_move(col)]

    def drop_piece(self, column: int, player: Player) -> bool:
        """
        Place a piece in the lowest empty cell of a column.

        Args:
            column: The column to drop into (0-indexed)
            player: The player whose piece is placed

        Returns:
            True if the piece was placed, False if the column is full

        Raises:
            IndexError: If the column is not on the board
        """
        if not (0 <= column < self.columns):
            raise IndexError(f"Column {column} out of range 0-{self.columns - 1}")

        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                debug.trace(f"Placing {player.name} at ({row}, {column})", "board")
                self.grid[row, column] = player.value
                self.last_move = (row, column)
                self.moves_made += 1
                return True

        debug.debug(f"Column {column} is full", "board")
        return False

    def is_full(self) -> bool:
        """True when the top row has no empty cell, i.e. every column is full."""
        return not np.any(self.grid[0] == Player.EMPTY.value)

    def has_four_in_a_row(self, player: Player) -> bool:
        """
        Check whether a player occupies four aligned consecutive cells.

        Only the player who moved last can have created a new line, so the
        dispatcher calls this for the current player only.
        """
        debug.start_timer("win_check")
        found = bool(self.get_winning_line(player))
        debug.end_timer("win_check", "board")
        return found

    def get_winning_line(self, player: Player) -> List[Coord]:
        """
        Find the first four-cell window owned entirely by a player.

        Directions are scanned horizontal, vertical, diagonal up, diagonal down.

        Returns:
            List of (row, col) positions, or an empty list if there is none
        """
        for direction in Direction:
            for window in iter_windows(self.rows, self.columns, direction):
                rows, cols = zip(*window)
                if np.all(self.grid[list(rows), list(cols)] == player.value):
                    return window
        return []

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board in the format sent to participants."""
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
