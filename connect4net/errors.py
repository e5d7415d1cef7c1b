"""
errors.py - Error taxonomy for the Connect Four server

Move errors are recoverable: the acting player is told and asked again.
Move-source errors are fatal to the session.
"""


class Connect4Error(Exception):
    """Base class for all errors raised by connect4net."""


class SetupError(Connect4Error, ValueError):
    """Invalid board size, game mode or participant set."""


class MoveError(Connect4Error):
    """A submitted move was rejected; the same player moves again."""


class ParseError(MoveError):
    """The input line was empty or not a decimal integer."""

    def __init__(self, raw: str):
        super().__init__(f"Could not parse column from {raw!r}")
        self.raw = raw


class RangeError(MoveError):
    """The column number lies outside [1, columns]."""

    def __init__(self, column: int, columns: int):
        super().__init__(f"Column {column} is outside 1-{columns}")
        self.column = column
        self.columns = columns


class ColumnFullError(MoveError):
    """The column has no empty cell left."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class MoveSourceError(Connect4Error):
    """A move source can no longer supply input (e.g. local input closed)."""


class TransportError(MoveSourceError):
    """Disconnect or I/O failure on a remote participant's channel."""
