"""
server.py - Listening socket and connection acceptance for networked modes

The server accepts exactly as many participants as the game mode needs and
hands their transports to the session. It does not take part in the game.
"""

import socket
from typing import List, Optional

from connect4net.debug import debug
from connect4net.errors import SetupError
from connect4net.game.session import MODE_TABLE
from connect4net.interfaces.console import Console
from connect4net.net import protocol
from connect4net.net.transport import SocketTransport
from connect4net.utils import DEFAULT_HOST, DEFAULT_PORT, GameMode


class GameServer:
    """TCP listener for the participants of one game."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 console: Optional[Console] = None):
        self.host = host
        self.port = port
        self.console = console or Console()
        self._sock: Optional[socket.socket] = None

    @property
    def address(self):
        """Bound (host, port); useful when listening on port 0."""
        if self._sock is None:
            return None
        return self._sock.getsockname()[:2]

    def listen(self) -> None:
        """
        Bind and start listening.

        Raises:
            SetupError: If the address cannot be bound
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, self.port))
            sock.listen(2)
        except OSError as e:
            sock.close()
            raise SetupError(f"Error starting server on {self.host}:{self.port}: {e}") from e

        self._sock = sock
        debug.info(f"Listening on {self.address}", "server")
        self.console.write(f"Server started on port {self.address[1]}\n")

    def accept_participants(self, mode: GameMode) -> List[SocketTransport]:
        """
        Accept the connections a mode requires, in player order.

        Returns:
            Connected transports, indexed as the mode table expects

        Raises:
            SetupError: If accepting a connection fails
        """
        spec = MODE_TABLE[mode]
        if self._sock is None:
            self.listen()

        transports: List[SocketTransport] = []
        try:
            for number in spec.connection_order():
                self.console.write(protocol.waiting_for_player(number))
                try:
                    conn, addr = self._sock.accept()
                except OSError as e:
                    raise SetupError(f"Error accepting connection: {e}") from e

                transport = SocketTransport(conn, name=f"player{number}@{addr[0]}:{addr[1]}")
                transports.append(transport)
                debug.info(f"Player {number} connected from {addr}", "server")
                self.console.write(protocol.player_connected(number))
        except SetupError:
            for transport in transports:
                transport.close()
            raise

        self.console.write(protocol.ALL_CONNECTED)
        return transports

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            debug.debug("Listening socket closed", "server")

    def __enter__(self) -> 'GameServer':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
