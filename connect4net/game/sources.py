"""
sources.py - Where each player's column choice comes from

A move source hands the dispatcher one raw input line per turn and receives
the rejection notices for its player. There are three kinds: the local
operator on the server console, a remote participant behind a transport, and
the scripted computer opponent.
"""

import random
from enum import Enum
from typing import Optional

from connect4net.debug import debug
from connect4net.errors import TransportError
from connect4net.interfaces.console import Console
from connect4net.net import protocol
from connect4net.net.transport import Transport
from connect4net.utils import Player


class SourceKind(Enum):
    LOCAL = "local"
    TRANSPORT = "transport"
    SCRIPTED = "scripted"


class MoveSource:
    """Base class for move sources."""

    kind: SourceKind = None
    transport: Optional[Transport] = None

    def request_line(self, player: Player, columns: int) -> str:
        """
        Return one raw input line for the player's move.

        Raises:
            MoveSourceError: If the source can no longer supply input
        """
        raise NotImplementedError

    def report(self, message: str) -> None:
        """Deliver a notice (e.g. invalid input) to this source's player."""
        raise NotImplementedError


class LocalOperatorSource(MoveSource):
    """The operator typing at the server console."""

    kind = SourceKind.LOCAL

    def __init__(self, console: Console):
        self.console = console

    def request_line(self, player: Player, columns: int) -> str:
        return self.console.read_line(protocol.turn_prompt(player, columns).rstrip("\n"))

    def report(self, message: str) -> None:
        self.console.write(message)


class TransportSource(MoveSource):
    """A remote participant; prompts are sent by the broadcaster beforehand."""

    kind = SourceKind.TRANSPORT

    def __init__(self, transport: Transport):
        self.transport = transport

    def request_line(self, player: Player, columns: int) -> str:
        return self.transport.read_line()

    def report(self, message: str) -> None:
        # Best effort; a dead transport surfaces on the next read
        try:
            self.transport.write_line(message)
        except TransportError as e:
            debug.warning(f"Could not deliver notice to {self.transport.name}: {e}", "session")


class ScriptedOpponentSource(MoveSource):
    """
    Computer opponent picking a column uniformly at random in [1, columns].

    No validity pre-check is made; a full column is rejected like any other
    move and the opponent simply draws again.
    """

    kind = SourceKind.SCRIPTED

    def __init__(self, console: Console, rng: Optional[random.Random] = None):
        self.console = console
        self.rng = rng or random.Random()

    def request_line(self, player: Player, columns: int) -> str:
        column = self.rng.randint(1, columns)
        self.console.write(protocol.computer_move_notice(player, column))
        return str(column)

    def report(self, message: str) -> None:
        self.console.write(message)
