"""
cli.py - Operator setup and server-side game runner

This module asks the operator at the server console for a board size and a
game mode, accepts the remote participants the mode needs and runs the turn
dispatcher until the game ends.
"""

import random
from typing import Callable, Optional, Tuple

from connect4net.debug import debug
from connect4net.errors import SetupError
from connect4net.game.board import validate_board_size
from connect4net.game.dispatcher import Outcome, TurnDispatcher
from connect4net.game.session import MODE_TABLE, GameSession
from connect4net.interfaces.console import Console
from connect4net.net.server import GameServer
from connect4net.utils import (DEFAULT_HOST, DEFAULT_PORT, MAX_BOARD_SIZE, MIN_BOARD_SIZE,
                               WIDE_BOARD_COLUMNS, GameMode)

# (label, columns, rows)
BOARD_PRESETS = {
    1: ("8x6", 8, 6),
    2: ("6x7", 6, 7),
    3: ("9x14", 9, 14),
}
CUSTOM_CHOICE = 4

MODE_CHOICES = {
    1: GameMode.SERVER_VS_CLIENT,
    2: GameMode.CLIENT_VS_CLIENT,
    3: GameMode.SERVER_VS_COMPUTER,
    4: GameMode.CLIENT_VS_COMPUTER,
}

INVALID_CHOICE = "Invalid choice. Please try again.\n"
WIDE_BOARD_WARNING = f"Warning: The board may look wonky when columns exceed {WIDE_BOARD_COLUMNS}.\n"


def read_menu_choice(console: Console, choices) -> int:
    """
    Read a menu number from the console.

    Raises:
        SetupError: If the line is not one of the choices
    """
    raw = console.read_line("Enter your choice: ").strip()
    try:
        choice = int(raw)
    except ValueError:
        raise SetupError(f"Not a number: {raw!r}") from None
    if choice not in choices:
        raise SetupError(f"No such choice: {choice}")
    return choice


def read_custom_size(console: Console) -> Tuple[int, int]:
    """
    Ask for columns and rows.

    Returns:
        (rows, columns)

    Raises:
        SetupError: If either value is not a number in range
    """
    cols_raw = console.read_line(f"Enter number of columns ({MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}): ")
    rows_raw = console.read_line(f"Enter number of rows ({MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}): ")
    try:
        columns = int(cols_raw.strip())
        rows = int(rows_raw.strip())
    except ValueError:
        raise SetupError("Board size must be numeric") from None
    validate_board_size(rows, columns)
    return rows, columns


def prompt_until_valid(console: Console, ask: Callable[[], object], on_error: str = INVALID_CHOICE):
    """Repeat ask() until it stops raising SetupError."""
    while True:
        try:
            return ask()
        except SetupError as e:
            debug.debug(f"Setup input rejected: {e}", "cli")
            console.write(on_error)


def select_board_size(console: Console) -> Tuple[int, int]:
    """
    Let the operator pick a preset or a custom board size.

    Returns:
        (rows, columns)
    """
    def ask():
        console.write("Select Board Size:\n")
        for number, (label, _, _) in BOARD_PRESETS.items():
            console.write(f"{number}. {label}\n")
        console.write(f"{CUSTOM_CHOICE}. Custom\n")

        choice = read_menu_choice(console, set(BOARD_PRESETS) | {CUSTOM_CHOICE})
        if choice in BOARD_PRESETS:
            _, columns, rows = BOARD_PRESETS[choice]
            return rows, columns

        try:
            return read_custom_size(console)
        except SetupError as e:
            debug.debug(f"Custom size rejected: {e}", "cli")
            console.write(
                f"Invalid board size. Minimum size is {MIN_BOARD_SIZE}x{MIN_BOARD_SIZE} "
                f"and maximum size is {MAX_BOARD_SIZE}x{MAX_BOARD_SIZE}.\n"
            )
            return None

    size = None
    while size is None:
        size = prompt_until_valid(console, ask)
    rows, columns = size
    warn_if_wide(console, columns)
    return rows, columns


def warn_if_wide(console: Console, columns: int) -> None:
    if columns > WIDE_BOARD_COLUMNS:
        debug.warning(f"{columns} columns will render with uneven spacing", "cli")
        console.write(WIDE_BOARD_WARNING)


def select_game_mode(console: Console) -> GameMode:
    """Let the operator pick one of the four game modes."""
    def ask():
        console.write("Select Game Mode:\n")
        for number, mode in MODE_CHOICES.items():
            console.write(f"{number}. {mode.title}\n")
        return MODE_CHOICES[read_menu_choice(console, MODE_CHOICES)]

    return prompt_until_valid(console, ask)


class ServerCLI:
    """Sets up and runs one game on the server console."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 console: Optional[Console] = None, seed: Optional[int] = None):
        self.host = host
        self.port = port
        self.console = console or Console()
        self.rng = random.Random(seed)

    def configure(self, rows: Optional[int] = None, columns: Optional[int] = None,
                  mode: Optional[GameMode] = None) -> Tuple[int, int, GameMode]:
        """
        Fill in whatever the command line did not supply by asking the operator.

        Raises:
            SetupError: If a supplied board size is invalid
        """
        if rows is None or columns is None:
            rows, columns = select_board_size(self.console)
        else:
            validate_board_size(rows, columns)
            warn_if_wide(self.console, columns)

        if mode is None:
            mode = select_game_mode(self.console)

        debug.info(f"Configured {rows}x{columns} board, mode {mode.value}", "cli")
        return rows, columns, mode

    def play(self, rows: int, columns: int, mode: GameMode) -> Outcome:
        """
        Accept the participants the mode needs and run the game.

        Raises:
            SetupError: If the server cannot listen or accept connections
        """
        transports = []
        if MODE_TABLE[mode].networked:
            with GameServer(self.host, self.port, self.console) as server:
                server.listen()
                transports = server.accept_participants(mode)

        session = GameSession(rows, columns, mode, transports, self.console, self.rng)
        return TurnDispatcher(session).run()

    def run(self, rows: Optional[int] = None, columns: Optional[int] = None,
            mode: Optional[GameMode] = None) -> Outcome:
        rows, columns, mode = self.configure(rows, columns, mode)
        return self.play(rows, columns, mode)
