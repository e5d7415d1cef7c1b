"""
utils.py - Constants, enumerations and helpers shared by the Connect Four server

This module holds the board limits, network defaults, the Player and GameMode
enumerations, the win-scan direction vectors and the ASCII board renderer
whose output is sent to every participant.
"""

from enum import Enum, auto
from typing import Iterator, List, Tuple

import numpy as np

# Board constants
MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 20
CONNECT_N = 4  # Number of pieces in a row to win
WIDE_BOARD_COLUMNS = 9  # Legend numbers above this width take two characters

# Network defaults
DEFAULT_HOST = "0.0.0.0"
DEFAULT_CLIENT_HOST = "localhost"
DEFAULT_PORT = 8000
ENCODING = "utf-8"

Coord = Tuple[int, int]  # (row, col), row 0 is the top row


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def marker(self) -> str:
        return MARKERS[self.value]

    def __str__(self):
        return self.marker


MARKERS = {
    Player.EMPTY.value: ".",
    Player.ONE.value: "X",
    Player.TWO.value: "O",
}


class GameMode(Enum):
    """Assignment of move sources to the two player slots, fixed per session."""
    SERVER_VS_CLIENT = "server-vs-client"
    CLIENT_VS_CLIENT = "client-vs-client"
    SERVER_VS_COMPUTER = "server-vs-computer"
    CLIENT_VS_COMPUTER = "client-vs-computer"

    @property
    def title(self) -> str:
        return " vs ".join(part.capitalize() for part in self.value.split("-vs-"))

    @classmethod
    def from_string(cls, value: str) -> 'GameMode':
        """Look up a mode by its value ("client-vs-client") or name."""
        key = value.strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown game mode: {value}")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


def iter_windows(rows: int, cols: int, direction: Direction,
                 length: int = CONNECT_N) -> Iterator[List[Coord]]:
    """
    Yield every run of `length` in-bounds cells along a direction.

    Args:
        rows: Number of board rows
        cols: Number of board columns
        direction: Direction to scan
        length: Window length

    Yields:
        Lists of (row, col) coordinates, starting cell first
    """
    dr, dc = DIRECTION_VECTORS[direction]
    span_r = (length - 1) * dr
    span_c = (length - 1) * dc

    for row in range(max(0, -span_r), rows - max(0, span_r)):
        for col in range(max(0, -span_c), cols - max(0, span_c)):
            yield [(row + i * dr, col + i * dc) for i in range(length)]


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board in the wire format sent to every participant.

    An empty line, one line per row with every marker followed by a space,
    the 1-based column legend in the same layout, then a blank line.

    Args:
        board: The game grid

    Returns:
        Text representation of the board
    """
    rows, cols = board.shape
    result = ["\n"]

    for row in range(rows):
        result.append("".join(MARKERS[int(cell)] + " " for cell in board[row]))
        result.append("\n")

    result.append("".join(f"{col} " for col in range(1, cols + 1)))
    result.append("\n\n")

    return "".join(result)
