"""
client.py - Remote participant terminal passthrough

Prints whatever the server sends and, whenever the server asks for a column,
reads one line from the user and sends it back.
"""

import socket
from typing import Optional

from connect4net.debug import debug
from connect4net.errors import MoveSourceError, TransportError
from connect4net.interfaces.console import Console
from connect4net.net.protocol import TURN_PROMPT_MARKER
from connect4net.net.transport import SocketTransport, Transport
from connect4net.utils import DEFAULT_CLIENT_HOST, DEFAULT_PORT

CONNECTION_CLOSED = "Connection closed by server.\n"


class RemoteClient:
    """Relays lines between a server transport and the local terminal."""

    def __init__(self, transport: Transport, console: Optional[Console] = None):
        self.transport = transport
        self.console = console or Console()
        self.moves_sent = 0

    @classmethod
    def connect(cls, host: str = DEFAULT_CLIENT_HOST, port: int = DEFAULT_PORT,
                console: Optional[Console] = None) -> 'RemoteClient':
        """
        Open a connection to the game server.

        Raises:
            TransportError: If the server cannot be reached
        """
        try:
            sock = socket.create_connection((host, port))
        except OSError as e:
            raise TransportError(f"Error connecting to server {host}:{port}: {e}") from e
        debug.info(f"Connected to {host}:{port}", "client")
        return cls(SocketTransport(sock, name=f"{host}:{port}"), console)

    def run(self) -> None:
        """Relay until the server closes the connection or local input ends."""
        try:
            while True:
                try:
                    line = self.transport.read_line().strip()
                except TransportError as e:
                    debug.debug(f"Read loop ended: {e}", "client")
                    self.console.write(CONNECTION_CLOSED)
                    return

                if not line:
                    continue
                self.console.write(line + "\n")

                if TURN_PROMPT_MARKER in line:
                    self._send_move()
        except MoveSourceError as e:
            debug.info(f"Stopping client: {e}", "client")
        finally:
            self.transport.close()

    def _send_move(self) -> None:
        move = self.console.read_line().strip()
        try:
            self.transport.write_line(move)
        except TransportError as e:
            debug.error(f"Error sending input to server: {e}", "client")
            raise
        self.moves_sent += 1
