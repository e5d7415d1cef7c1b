"""
broadcast.py - Fan-out of board state and announcements

Writes to transports are best effort: a failed write is logged and the
transport is left marked broken, the game carries on. A broken transport that
belongs to a player ends the game on that player's next read.
"""

from typing import Optional, Sequence

from connect4net.debug import debug
from connect4net.errors import TransportError
from connect4net.game.board import Board
from connect4net.interfaces.console import Console
from connect4net.net import protocol
from connect4net.net.transport import Transport
from connect4net.utils import Player


class Broadcaster:
    """Sends text to every connected participant and to the local display."""

    def __init__(self, transports: Sequence[Transport], console: Console):
        self.transports = tuple(transports)
        self.console = console
        self.failed_writes = 0

    def _send(self, transport: Transport, text: str) -> bool:
        if transport.closed:
            return False
        try:
            transport.write_line(text)
            return True
        except TransportError as e:
            self.failed_writes += 1
            debug.warning(f"Broadcast to {transport.name} failed: {e}", "broadcast")
            return False

    def to_transports(self, text: str) -> int:
        """
        Write text to every transport.

        Returns:
            Number of transports that accepted the write
        """
        return sum(self._send(transport, text) for transport in self.transports)

    def announce(self, text: str) -> None:
        """Send text to every transport and show it on the local display."""
        self.to_transports(text)
        self.console.write(text)

    def board(self, board: Board) -> None:
        """Render the board once and send it everywhere."""
        self.announce(board.render())

    def turn(self, player: Player, acting: Optional[Transport], columns: int) -> None:
        """
        Send turn notifications before a player's move is read.

        The acting transport gets the column prompt and every other transport
        gets the waiting notice. When a remote player is acting the local
        display also shows who is moving; acting is None for the local operator.
        """
        for transport in self.transports:
            if transport is acting:
                self._send(transport, protocol.turn_prompt(player, columns))
            else:
                self._send(transport, protocol.waiting_notice(player))
        if acting is not None:
            self.console.write(protocol.client_moving_notice(player))
