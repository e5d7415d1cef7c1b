"""
protocol.py - Text of every message the server sends to participants

Every message is newline terminated. The remote client looks for
TURN_PROMPT_MARKER to decide when to read a column from its user.
"""

from connect4net.utils import Player

TURN_PROMPT_MARKER = "Enter column"

INVALID_INPUT = "Invalid input. Please enter a valid column number.\n"
COLUMN_FULL = "Column is full. Try another one.\n"
DRAW = "It's a draw!\n"
ALL_CONNECTED = "All players connected. Starting the game!\n"

ABORT_DISCONNECT = "client disconnection"
ABORT_ERROR = "error"


def turn_prompt(player: Player, columns: int) -> str:
    return f"Your turn (Player {player.value}). {TURN_PROMPT_MARKER} (1-{columns}): \n"


def waiting_notice(player: Player) -> str:
    return f"Player {player.value} is making a move...\n"


def client_moving_notice(player: Player) -> str:
    """Local display line shown while a remote player is choosing."""
    return f"Player {player.value} (Client) is making a move...\n"


def computer_move_notice(player: Player, column: int) -> str:
    return f"Computer (Player {player.value}) chooses column {column}\n"


def win_announcement(player: Player) -> str:
    return f"Player {player.value} wins!\n"


def game_aborted(reason: str) -> str:
    return f"Game ended due to {reason}.\n"


def waiting_for_player(number: int) -> str:
    return f"Waiting for Player {number} to connect...\n"


def player_connected(number: int) -> str:
    return f"Player {number} connected\n"
