"""
transport.py - Line-oriented channels to remote participants

A Transport carries newline-terminated text in both directions. The
dispatcher reads one line from the acting participant's transport per turn
and writes board renders and notices to every transport.
"""

import socket
from typing import Optional

from connect4net.debug import debug
from connect4net.errors import TransportError
from connect4net.utils import ENCODING


class Transport:
    """Bidirectional line channel to one remote participant."""

    def __init__(self, name: str):
        self.name = name
        self.broken = False
        self.closed = False

    def read_line(self) -> str:
        """
        Block until one line arrives and return it without the terminator.

        Raises:
            TransportError: On disconnect or I/O failure
        """
        raise NotImplementedError

    def write_line(self, text: str) -> None:
        """
        Send text, adding a trailing newline when it has none.

        Raises:
            TransportError: On I/O failure
        """
        raise NotImplementedError

    def close(self) -> None:
        self.closed = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def terminate(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


class SocketTransport(Transport):
    """Transport over a connected TCP socket."""

    def __init__(self, sock: socket.socket, name: Optional[str] = None):
        if name is None:
            try:
                peer = sock.getpeername()
            except OSError:
                peer = None
            if isinstance(peer, tuple):
                name = f"{peer[0]}:{peer[1]}"
            else:
                name = str(peer) if peer else "socket"
        super().__init__(name)
        self._sock = sock
        self._reader = sock.makefile("rb")

    def read_line(self) -> str:
        if self.closed:
            raise TransportError(f"{self.name}: transport is closed")
        try:
            line = self._reader.readline()
        except OSError as e:
            self.broken = True
            raise TransportError(f"{self.name}: read failed: {e}") from e

        if not line:
            self.broken = True
            raise TransportError(f"{self.name}: connection closed by peer")

        debug.trace(f"{self.name} <- {line!r}", "transport")
        # Undecodable bytes become U+FFFD and fail column parsing downstream
        return line.decode(ENCODING, errors="replace").rstrip("\r\n")

    def write_line(self, text: str) -> None:
        if self.closed:
            raise TransportError(f"{self.name}: transport is closed")
        data = terminate(text)
        try:
            self._sock.sendall(data.encode(ENCODING))
        except OSError as e:
            self.broken = True
            raise TransportError(f"{self.name}: write failed: {e}") from e
        debug.trace(f"{self.name} -> {data!r}", "transport")

    def close(self) -> None:
        if self.closed:
            return
        super().close()
        debug.debug(f"Closing transport {self.name}", "transport")
        try:
            self._reader.close()
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Peer may already be gone
            pass
        finally:
            self._sock.close()
