"""
dispatcher.py - Turn dispatcher state machine for a Connect Four session

The dispatcher owns the turn loop: it asks the current player's move source for
a column, validates and applies it, broadcasts the board and decides when the
game ends. Only one player's input is awaited at a time.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from connect4net.debug import debug
from connect4net.errors import (ColumnFullError, MoveError, MoveSourceError, ParseError,
                                RangeError, TransportError)
from connect4net.game.broadcast import Broadcaster
from connect4net.game.session import GameSession
from connect4net.game.sources import MoveSource
from connect4net.net import protocol
from connect4net.utils import Player


class DispatcherState(Enum):
    AWAITING_MOVE = auto()
    APPLYING = auto()
    FINISHED = auto()


class OutcomeKind(Enum):
    WIN = auto()
    DRAW = auto()
    ABORTED = auto()


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner: Optional[Player] = None
    reason: str = ""

    @classmethod
    def win(cls, player: Player) -> 'Outcome':
        return cls(OutcomeKind.WIN, winner=player)

    @classmethod
    def draw(cls) -> 'Outcome':
        return cls(OutcomeKind.DRAW)

    @classmethod
    def aborted(cls, reason: str) -> 'Outcome':
        return cls(OutcomeKind.ABORTED, reason=reason)


# ASCII digits only; int() alone also takes "1_0" and non-ASCII digits
DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def parse_column(raw: str, columns: int) -> int:
    """
    Turn an input line into a validated 1-based column number.

    Raises:
        ParseError: If the line is empty or not a decimal integer
        RangeError: If the number is outside [1, columns]
    """
    text = raw.strip()
    if not DECIMAL_RE.fullmatch(text):
        raise ParseError(raw)
    column = int(text)

    if not 1 <= column <= columns:
        raise RangeError(column, columns)
    return column


class TurnDispatcher:
    """
    Runs the turn loop for one game session.

    States: AWAITING_MOVE(current_player) -> APPLYING -> AWAITING_MOVE of the
    other player, or FINISHED with a win, draw or abort outcome. Rejected moves
    leave the board untouched and the same player moves again.
    """

    def __init__(self, session: GameSession, broadcaster: Optional[Broadcaster] = None):
        self.session = session
        self.board = session.board
        self.broadcaster = broadcaster or Broadcaster(session.notification_targets(),
                                                      session.console)
        self.state = DispatcherState.AWAITING_MOVE
        self.current_player = Player.ONE
        self.outcome: Optional[Outcome] = None
        self.moves_applied = 0

    @property
    def finished(self) -> bool:
        return self.state == DispatcherState.FINISHED

    def run(self) -> Outcome:
        """
        Play the game to the end and tear the session down.

        Returns:
            The final outcome
        """
        debug.info(f"Starting game in mode {self.session.mode.value}", "dispatcher")
        self.broadcaster.board(self.board)
        try:
            while not self.finished:
                self.step()
        finally:
            self.session.close()
        debug.info(f"Game finished: {self.outcome}", "dispatcher")
        return self.outcome

    def step(self) -> Optional[Outcome]:
        """
        Run one iteration of the turn loop.

        Returns:
            The outcome once the game has finished, otherwise None
        """
        if self.finished:
            return self.outcome

        player = self.current_player
        source = self.session.source_for(player)

        try:
            raw = self._request(player, source)
        except MoveSourceError as e:
            return self._abort(source, e)

        try:
            self.state = DispatcherState.APPLYING
            self._apply(raw, player)
        except MoveError as e:
            debug.info(f"Rejected move from Player {player.value}: {e}", "dispatcher")
            self.state = DispatcherState.AWAITING_MOVE
            self._report(source, e)
            return None

        self.moves_applied += 1
        self.broadcaster.board(self.board)

        if self.board.has_four_in_a_row(player):
            debug.info(f"Player {player.value} wins with line "
                       f"{self.board.get_winning_line(player)}", "dispatcher")
            self.broadcaster.announce(protocol.win_announcement(player))
            return self._finish(Outcome.win(player))

        if self.board.is_full():
            self.broadcaster.announce(protocol.DRAW)
            return self._finish(Outcome.draw())

        self.current_player = player.other()
        self.state = DispatcherState.AWAITING_MOVE
        debug.debug(f"Switching to Player {self.current_player.value}", "dispatcher")
        return None

    def _request(self, player: Player, source: MoveSource) -> str:
        columns = self.board.columns
        if self.session.spec.slot(player).turn_notice:
            # source.transport is None for the local operator: everyone waits
            self.broadcaster.turn(player, source.transport, columns)
        return source.request_line(player, columns)

    def _apply(self, raw: str, player: Player) -> None:
        column = parse_column(raw, self.board.columns)
        if not self.board.drop_piece(column - 1, player):
            debug.debug(f"Column {column} full, open columns "
                        f"{[c + 1 for c in self.board.get_valid_moves()]}", "dispatcher")
            raise ColumnFullError(column)
        debug.debug(f"Player {player.value} dropped into column {column}, "
                    f"cell {self.board.last_move}", "dispatcher")

    def _report(self, source: MoveSource, error: MoveError) -> None:
        if isinstance(error, ColumnFullError):
            source.report(protocol.COLUMN_FULL)
        else:
            source.report(protocol.INVALID_INPUT)

    def _abort(self, source: MoveSource, error: MoveSourceError) -> Outcome:
        if isinstance(error, TransportError):
            reason = protocol.ABORT_DISCONNECT
        else:
            reason = protocol.ABORT_ERROR
        debug.error(f"Move source {source.kind.value} failed: {error}", "dispatcher")
        self.broadcaster.announce(protocol.game_aborted(reason))
        return self._finish(Outcome.aborted(str(error)))

    def _finish(self, outcome: Outcome) -> Outcome:
        self.state = DispatcherState.FINISHED
        self.outcome = outcome
        return outcome
